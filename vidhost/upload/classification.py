"""
Chunk Outcome Classification

Maps the result of one chunk submission to SUCCESS, CONTINUE or FATAL.
Both transport conventions end up here: a returned non-2xx response and a
raised TransportError are classified by status code.
"""

from typing import Optional

from vidhost.constants import (
    CONTINUE_STATUS_CODE,
    FATAL_STATUS_THRESHOLD,
    ChunkOutcome,
)
from vidhost.interfaces.transport_interface import ApiResponse


def classify_error(status_code: Optional[int]) -> ChunkOutcome:
    """
    Classify a failure signal by its status code.

    Aborts iff status != 100 and status >= 400, so 101-399 continue
    just like 100. A failure without any status is fatal.
    """
    if status_code is None:
        return ChunkOutcome.FATAL
    if status_code != CONTINUE_STATUS_CODE and status_code >= FATAL_STATUS_THRESHOLD:
        return ChunkOutcome.FATAL
    return ChunkOutcome.CONTINUE


def classify_response(response: ApiResponse) -> ChunkOutcome:
    """Classify a returned response: 2xx succeeds, anything else as an error"""
    if response.is_successful():
        return ChunkOutcome.SUCCESS
    return classify_error(response.status_code)
