"""
Primitive Reader
=================

Reads fixed-width unsigned integers from a binary stream in the byte order
named by an ELF data-encoding byte.  ``ELFDATA2LSB`` selects little-endian;
every other value is read big-endian.

All helpers raise :class:`~elfscope.core.errors.TruncatedInput` when the
stream runs out and wrap stream :class:`OSError` as
:class:`~elfscope.core.errors.IoFailure`.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

from elfscope.core.errors import IoFailure, TruncatedInput
from elfscope.parsers import gabi

_U16 = {"<": struct.Struct("<H"), ">": struct.Struct(">H")}
_U32 = {"<": struct.Struct("<I"), ">": struct.Struct(">I")}
_U64 = {"<": struct.Struct("<Q"), ">": struct.Struct(">Q")}


def byte_order(endianness: int) -> str:
    """Return the :mod:`struct` byte-order prefix for an ident data byte."""
    return "<" if endianness == gabi.ELFDATA2LSB else ">"


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly *size* bytes from *stream*.

    Raw streams may return fewer bytes than asked for; reading continues
    until *size* bytes have arrived or the stream reports end of input.

    Raises:
        TruncatedInput: If the stream has fewer than *size* bytes left.
        IoFailure: If the stream itself reports an error.
    """
    buf = bytearray()
    while len(buf) < size:
        try:
            chunk = stream.read(size - len(buf))
        except OSError as exc:
            raise IoFailure(f"Read of {size} bytes failed: {exc}") from exc
        if not chunk:
            raise TruncatedInput(size, len(buf))
        buf += chunk
    return bytes(buf)


def seek(stream: BinaryIO, offset: int) -> None:
    """Seek *stream* to the absolute *offset*, wrapping stream errors."""
    try:
        stream.seek(offset)
    except (OSError, ValueError, OverflowError) as exc:
        raise IoFailure(f"Seek to offset {offset:#x} failed: {exc}") from exc


def read_u8(stream: BinaryIO) -> int:
    return read_exact(stream, 1)[0]


def read_u16(stream: BinaryIO, endianness: int) -> int:
    return _U16[byte_order(endianness)].unpack(read_exact(stream, 2))[0]


def read_u32(stream: BinaryIO, endianness: int) -> int:
    return _U32[byte_order(endianness)].unpack(read_exact(stream, 4))[0]


def read_u64(stream: BinaryIO, endianness: int) -> int:
    return _U64[byte_order(endianness)].unpack(read_exact(stream, 8))[0]


def read_addr(stream: BinaryIO, elf_class: int, endianness: int) -> int:
    """Read an address-sized field: 4 bytes for ELFCLASS32, else 8 bytes.

    32-bit values are returned as-is, which zero-extends them.
    """
    if elf_class == gabi.ELFCLASS32:
        return read_u32(stream, endianness)
    return read_u64(stream, endianness)
