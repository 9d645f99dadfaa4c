"""Tests for chunk planning."""

import math

import pytest

from filestore.upload.planner import plan_chunks

MIB = 1024 * 1024


@pytest.mark.parametrize(
    "file_size,chunk_size",
    [(1, 1), (7, 3), (100, 10), (101, 10), (5 * MIB + 1, 5 * MIB), (123_456, 1000)],
)
def test_plan_covers_whole_payload(file_size, chunk_size):
    """Chunks are contiguous, ascending and add up to the file size."""
    chunks = plan_chunks(file_size, chunk_size)

    assert len(chunks) == math.ceil(file_size / chunk_size)
    assert chunks[0].start == 0
    assert chunks[-1].end == file_size
    for previous, current in zip(chunks, chunks[1:]):
        assert current.start == previous.end
    assert sum(chunk.length for chunk in chunks) == file_size
    assert all(0 < chunk.length <= chunk_size for chunk in chunks)


def test_plan_for_empty_payload_is_empty():
    """A zero-byte payload yields no chunks."""
    assert plan_chunks(0, 5 * MIB) == []


def test_plan_exact_multiple():
    """Exact multiples produce k full-size chunks."""
    chunks = plan_chunks(4 * 1000, 1000)

    assert len(chunks) == 4
    assert [chunk.length for chunk in chunks] == [1000] * 4


def test_plan_remainder_chunk():
    """The last chunk holds file_size mod chunk_size bytes."""
    chunks = plan_chunks(2503, 1000)

    assert chunks[-1].length == 503
    assert chunks[-1].length < 1000


def test_plan_twelve_megabytes_in_five_mib_chunks():
    """12,000,000 bytes at 5 MiB give two full chunks and a 1,514,240 byte tail."""
    chunks = plan_chunks(12_000_000, 5 * MIB)

    assert [chunk.length for chunk in chunks] == [5242880, 5242880, 1514240]
    assert [chunk.content_range(12_000_000) for chunk in chunks] == [
        "bytes 0-5242879/12000000",
        "bytes 5242880-10485759/12000000",
        "bytes 10485760-11999999/12000000",
    ]


def test_plan_slices_reconstruct_buffer():
    """Concatenating chunk slices in plan order gives back the original bytes."""
    buffer = bytes(range(256)) * 41
    chunks = plan_chunks(len(buffer), 1000)

    assert b"".join(buffer[c.start:c.end] for c in chunks) == buffer


def test_plan_single_chunk_when_payload_smaller_than_chunk():
    chunks = plan_chunks(10, 5 * MIB)

    assert len(chunks) == 1
    assert (chunks[0].start, chunks[0].end) == (0, 10)


@pytest.mark.parametrize("file_size,chunk_size", [(-1, 10), (10, 0), (10, -5)])
def test_plan_rejects_invalid_sizes(file_size, chunk_size):
    with pytest.raises(ValueError):
        plan_chunks(file_size, chunk_size)
