"""
Section Content Loader
=======================

Reads the bytes backing each section.  ``SHT_NOBITS`` sections (``.bss``
and friends) occupy no space in the file and are left empty without
touching the stream.
"""

from __future__ import annotations

from typing import BinaryIO

from elfscope.core.errors import IoFailure, TruncatedInput
from elfscope.core.models import SectionHeader
from elfscope.parsers import gabi
from elfscope.parsers.primitives import seek

DEFAULT_CHUNK_SIZE: int = 65_536


def load_section_data(
    stream: BinaryIO,
    header: SectionHeader,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """Return exactly ``sh_size`` bytes read from ``sh_offset``.

    The read proceeds in chunks of at most *chunk_size* bytes, so memory
    use tracks what the stream actually delivers rather than the size the
    header declares.

    Raises:
        TruncatedInput: The stream holds fewer than ``sh_size`` bytes from
            ``sh_offset``.
    """
    if header.sh_type == gabi.SHT_NOBITS:
        return b""

    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    seek(stream, header.sh_offset)

    wanted = header.sh_size
    buf = bytearray()
    while len(buf) < wanted:
        step = min(chunk_size, wanted - len(buf))
        try:
            chunk = stream.read(step)
        except OSError as exc:
            raise IoFailure(
                f"Read of section content at {header.sh_offset:#x} failed: {exc}"
            ) from exc
        if not chunk:
            raise TruncatedInput(wanted, len(buf))
        buf += chunk
    return bytes(buf)
