"""
Byte Range Chunker

Splits a readable byte stream into sequential, non-overlapping chunks.
Reads exactly one chunk per step so the stream cursor never runs ahead
of the chunk being uploaded.
"""

from typing import BinaryIO, Iterator, Tuple

from vidhost.errors import InvalidSource
from vidhost.models.upload import UploadChunk


def check_dimensions(total_length: int, chunk_size: int) -> None:
    """Raise InvalidSource unless both sizes are positive"""
    if total_length <= 0:
        raise InvalidSource(f"Source length must be positive, got {total_length}")
    if chunk_size <= 0:
        raise InvalidSource(f"Chunk size must be positive, got {chunk_size}")


def plan_ranges(total_length: int, chunk_size: int) -> Iterator[Tuple[int, int]]:
    """
    Yield the (offset, end) pairs covering [0, total_length).

    Every range is chunk_size long except possibly the last one.

    Raises:
        InvalidSource: If total_length or chunk_size is not positive

    Example:
        list(plan_ranges(10, 4))
        # [(0, 4), (4, 8), (8, 10)]
    """
    check_dimensions(total_length, chunk_size)

    for offset in range(0, total_length, chunk_size):
        yield offset, min(offset + chunk_size, total_length)


class ByteRangeChunker:
    """
    Lazy, one-shot iterator of UploadChunk objects.

    Usage:
        with open(path, "rb") as stream:
            for chunk in ByteRangeChunker(stream, os.fstat(stream.fileno()).st_size, size):
                submit(chunk)
    """

    def __init__(self, stream: BinaryIO, total_length: int, chunk_size: int):
        """
        Args:
            stream: Binary stream positioned at the first byte to upload
            total_length: Number of bytes to read from the stream
            chunk_size: Maximum bytes per chunk

        Raises:
            InvalidSource: If total_length or chunk_size is not positive
        """
        self.stream = stream
        self.total_length = total_length
        self.chunk_size = chunk_size
        check_dimensions(total_length, chunk_size)
        self._ranges = plan_ranges(total_length, chunk_size)

    def __iter__(self) -> "ByteRangeChunker":
        return self

    def __next__(self) -> UploadChunk:
        offset, end = next(self._ranges)

        data = self.stream.read(end - offset)
        if len(data) != end - offset:
            raise InvalidSource(
                f"Source ended early: expected {end - offset} bytes at offset "
                f"{offset}, read {len(data)}"
            )

        return UploadChunk(
            offset=offset,
            end=end,
            total_length=self.total_length,
            data=data,
        )

    @property
    def chunk_count(self) -> int:
        """Total number of chunks for this source"""
        return -(-self.total_length // self.chunk_size)
