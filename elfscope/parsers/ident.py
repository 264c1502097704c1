"""
Ident Validator
================

Consumes the 16-byte ``e_ident`` prologue and checks the magic number and
the ident version.  The class and data-encoding bytes are passed through
unchecked; the decoders downstream branch on them.
"""

from __future__ import annotations

from typing import BinaryIO

from elfscope.core.errors import BadMagic, UnsupportedVersion
from elfscope.parsers import gabi
from elfscope.parsers.primitives import read_exact


def parse_ident(stream: BinaryIO) -> bytes:
    """Read and validate the ELF ident.

    Returns:
        The 16 ident bytes.

    Raises:
        TruncatedInput: Fewer than 16 bytes are available.
        BadMagic: The first four bytes are not ``\\x7fELF``.
        UnsupportedVersion: ``e_ident[EI_VERSION]`` is not ``EV_CURRENT``.
    """
    ident = read_exact(stream, gabi.EI_NIDENT)

    magic = ident[:gabi.EI_CLASS]
    if magic != gabi.ELFMAGIC:
        raise BadMagic(magic)

    version = ident[gabi.EI_VERSION]
    if version != gabi.EV_CURRENT:
        raise UnsupportedVersion(version)

    return ident
