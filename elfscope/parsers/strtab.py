"""
String Table Resolver
======================

Looks up null-terminated strings in the content of a ``SHT_STRTAB``
section by byte offset.  Used for section names (through the table at
``e_shstrndx``) and for symbol names (through each symbol table's
``sh_link``).
"""

from __future__ import annotations

from elfscope.core.errors import OutOfRange, TextDecodeFailure


def get_string(data: bytes, offset: int) -> str:
    """Return the UTF-8 string starting at *offset* in *data*.

    The string runs up to the next NUL byte, or to the end of *data* if
    there is none.

    Raises:
        OutOfRange: *offset* is negative or at/after the end of *data*.
        TextDecodeFailure: The bytes are not valid UTF-8.
    """
    if offset < 0 or offset >= len(data):
        raise OutOfRange(
            f"String offset {offset} outside table of {len(data)} bytes"
        )
    end = data.find(b"\x00", offset)
    if end == -1:
        end = len(data)
    try:
        return data[offset:end].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TextDecodeFailure(
            f"Invalid UTF-8 in string table at offset {offset}: {exc}"
        ) from exc
