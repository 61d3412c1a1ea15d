"""
Upload Models

Data classes describing byte-range chunks and the state of one upload.
"""

from dataclasses import dataclass
from typing import Optional

from vidhost.models.video import Video


@dataclass(frozen=True)
class UploadChunk:
    """
    One contiguous byte range of an upload source.

    Covers [offset, end) of a source that is total_length bytes long.
    """

    offset: int
    end: int
    total_length: int
    data: bytes

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")
        if self.end <= self.offset:
            raise ValueError(
                f"end must be greater than offset ({self.end} <= {self.offset})"
            )
        if self.end > self.total_length:
            raise ValueError(
                f"end {self.end} exceeds total length {self.total_length}"
            )
        if len(self.data) != self.end - self.offset:
            raise ValueError(
                f"chunk holds {len(self.data)} bytes, "
                f"expected {self.end - self.offset}"
            )

    @property
    def size(self) -> int:
        """Number of bytes in this chunk"""
        return self.end - self.offset

    @property
    def is_last(self) -> bool:
        """Check if this chunk reaches the end of the source"""
        return self.end == self.total_length


@dataclass
class UploadSession:
    """
    Bookkeeping for a single upload call.

    last_response only changes on chunks classified as success.
    """

    video_id: str
    source_length: int
    chunk_size: int
    bytes_copied: int = 0
    chunks_submitted: int = 0
    last_response: Optional[Video] = None

    @property
    def is_complete(self) -> bool:
        """Check if every byte of the source was submitted"""
        return self.bytes_copied >= self.source_length

    @property
    def progress(self) -> float:
        """Fraction of the source submitted so far (0.0 to 1.0)"""
        return self.bytes_copied / self.source_length

    def record_chunk(self, chunk_end: int) -> None:
        """Advance the copied-bytes counter past a submitted chunk"""
        if chunk_end < self.bytes_copied or chunk_end > self.source_length:
            raise ValueError(
                f"chunk end {chunk_end} outside "
                f"[{self.bytes_copied}, {self.source_length}]"
            )
        self.bytes_copied = chunk_end
        self.chunks_submitted += 1
