"""Shared fixtures for the elfscope test suite."""

import io

import pytest

from elfscope.parsers import gabi

from elfbuild import build_sample


@pytest.fixture
def sample_image():
    """64-bit little-endian sample executable (raw bytes)."""
    return build_sample().data


@pytest.fixture
def sample_stream(sample_image):
    return io.BytesIO(sample_image)


@pytest.fixture
def sample_path(tmp_path, sample_image):
    path = tmp_path / "sample.elf"
    path.write_bytes(sample_image)
    return path


@pytest.fixture
def sample32_be_image():
    """32-bit big-endian variant of the sample executable."""
    return build_sample(gabi.ELFCLASS32, gabi.ELFDATA2MSB).data
