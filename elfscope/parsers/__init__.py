"""
elfscope Parsers
=================

Stateless decoders for the pieces of an ELF file:

- ``gabi``        -- Generic ABI constants and name tables
- ``primitives``  -- Fixed-width unsigned integer reads in a given byte order
- ``ident``       -- 16-byte ident validation
- ``header``      -- File header decoding
- ``tables``      -- Program and section header tables
- ``content``     -- Section content loading
- ``strtab``      -- Null-terminated string table lookups
- ``symbols``     -- Symbol table records
"""
