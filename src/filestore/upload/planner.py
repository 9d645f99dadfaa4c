"""Chunk planning for resumable uploads."""

from filestore.models.upload import ChunkRange


def plan_chunks(file_size: int, chunk_size: int) -> list[ChunkRange]:
    """Split ``[0, file_size)`` into consecutive ranges of at most ``chunk_size`` bytes.

    Args:
        file_size: Total payload size in bytes
        chunk_size: Maximum bytes per chunk

    Returns:
        Ordered, contiguous, non-overlapping ranges. Empty for a zero-size payload.

    Raises:
        ValueError: If file_size is negative or chunk_size is not positive
    """
    if file_size < 0:
        raise ValueError(f"file_size must be non-negative, got {file_size}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    number_of_chunks = (file_size + chunk_size - 1) // chunk_size
    chunks = []
    for index in range(number_of_chunks):
        start = index * chunk_size
        end = min(start + chunk_size, file_size)
        chunks.append(ChunkRange(start=start, end=end))
    return chunks
