"""Tests for ident validation and file header decoding."""

import io

import pytest

from elfscope.core.errors import BadMagic, TruncatedInput, UnsupportedVersion
from elfscope.core.models import FileHeader
from elfscope.parsers import gabi
from elfscope.parsers.header import parse_file_header
from elfscope.parsers.ident import parse_ident

from elfbuild import make_ident


# =============================================================================
# Ident
# =============================================================================

class TestIdent:
    """Magic and version checks on the 16-byte prologue."""

    def test_valid_ident(self):
        ident = make_ident(gabi.ELFCLASS32, gabi.ELFDATA2LSB)
        stream = io.BytesIO(ident + b"rest")
        assert parse_ident(stream) == ident
        assert stream.tell() == gabi.EI_NIDENT

    def test_empty_input(self):
        with pytest.raises(TruncatedInput):
            parse_ident(io.BytesIO(b""))

    @pytest.mark.parametrize("length", [1, 4, 8, 15])
    def test_short_input(self, length):
        with pytest.raises(TruncatedInput):
            parse_ident(io.BytesIO(make_ident()[:length]))

    @pytest.mark.parametrize("position", [0, 1, 2, 3])
    @pytest.mark.parametrize("value", [0x00, 42, 0xFF])
    def test_any_wrong_magic_byte(self, position, value):
        ident = bytearray(make_ident())
        ident[position] = value
        with pytest.raises(BadMagic) as excinfo:
            parse_ident(io.BytesIO(bytes(ident)))
        assert excinfo.value.actual == bytes(ident[:4])

    @pytest.mark.parametrize("version", [0, 2, 42, 255])
    def test_unsupported_version(self, version):
        ident = make_ident(version=version)
        with pytest.raises(UnsupportedVersion) as excinfo:
            parse_ident(io.BytesIO(ident))
        assert excinfo.value.actual == version

    def test_magic_is_checked_before_version(self):
        ident = bytearray(make_ident(version=9))
        ident[0] = 0
        with pytest.raises(BadMagic):
            parse_ident(io.BytesIO(bytes(ident)))

    @pytest.mark.parametrize("elf_class,endian", [(0, 0), (3, 1), (2, 9)])
    def test_class_and_data_bytes_are_not_validated(self, elf_class, endian):
        ident = make_ident(elf_class, endian)
        assert parse_ident(io.BytesIO(ident)) == ident


# =============================================================================
# File header
# =============================================================================

class TestFileHeader:
    """Header decoding for both classes and byte orders."""

    def test_elf32_little_endian(self):
        ident = make_ident(gabi.ELFCLASS32, gabi.ELFDATA2LSB, abiversion=7)
        data = bytes(range(36))

        header = parse_file_header(io.BytesIO(data), ident)

        assert header == FileHeader(
            elf_class=gabi.ELFCLASS32,
            endianness=gabi.ELFDATA2LSB,
            version=0x07060504,
            osabi=gabi.ELFOSABI_LINUX,
            abiversion=7,
            elftype=0x0100,
            arch=0x0302,
            e_entry=0x0B0A0908,
            e_phoff=0x0F0E0D0C,
            e_shoff=0x13121110,
            e_flags=0x17161514,
            e_ehsize=0x1918,
            e_phentsize=0x1B1A,
            e_phnum=0x1D1C,
            e_shentsize=0x1F1E,
            e_shnum=0x2120,
            e_shstrndx=0x2322,
        )

    def test_elf64_big_endian(self):
        ident = make_ident(gabi.ELFCLASS64, gabi.ELFDATA2MSB, abiversion=7)
        data = bytes(range(48))

        header = parse_file_header(io.BytesIO(data), ident)

        assert header == FileHeader(
            elf_class=gabi.ELFCLASS64,
            endianness=gabi.ELFDATA2MSB,
            version=0x04050607,
            osabi=gabi.ELFOSABI_LINUX,
            abiversion=7,
            elftype=0x0001,
            arch=0x0203,
            e_entry=0x08090A0B0C0D0E0F,
            e_phoff=0x1011121314151617,
            e_shoff=0x18191A1B1C1D1E1F,
            e_flags=0x20212223,
            e_ehsize=0x2425,
            e_phentsize=0x2627,
            e_phnum=0x2829,
            e_shentsize=0x2A2B,
            e_shnum=0x2C2D,
            e_shstrndx=0x2E2F,
        )

    def test_header_consumes_exact_size(self):
        for elf_class, size in ((gabi.ELFCLASS32, 36), (gabi.ELFCLASS64, 48)):
            stream = io.BytesIO(bytes(size + 8))
            parse_file_header(stream, make_ident(elf_class))
            assert stream.tell() == size

    @pytest.mark.parametrize("elf_class,size", [
        (gabi.ELFCLASS32, 36),
        (gabi.ELFCLASS64, 48),
    ])
    def test_every_truncation_fails(self, elf_class, size):
        ident = make_ident(elf_class, gabi.ELFDATA2LSB)
        data = bytes(size)
        for n in range(size):
            with pytest.raises(TruncatedInput):
                parse_file_header(io.BytesIO(data[:n]), ident)

    def test_properties(self):
        header = parse_file_header(
            io.BytesIO(bytes(36)), make_ident(gabi.ELFCLASS32, gabi.ELFDATA2MSB)
        )
        assert not header.is_64bit
        assert not header.is_little_endian
