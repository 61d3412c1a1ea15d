"""
Chunk Outcome Classification Tests
"""

import pytest

from vidhost.constants import ChunkOutcome
from vidhost.interfaces.transport_interface import ApiResponse
from vidhost.upload.classification import classify_error, classify_response


@pytest.mark.unit
class TestClassifyError:
    """Failure signals carrying a status code"""

    @pytest.mark.parametrize("status", [100, 101, 204, 301, 308, 399])
    def test_below_400_continues(self, status):
        assert classify_error(status) is ChunkOutcome.CONTINUE

    @pytest.mark.parametrize("status", [400, 401, 404, 429, 500, 503])
    def test_400_and_above_is_fatal(self, status):
        assert classify_error(status) is ChunkOutcome.FATAL

    def test_missing_status_is_fatal(self):
        assert classify_error(None) is ChunkOutcome.FATAL

    @pytest.mark.parametrize("status", [None, 100, 302, 404])
    def test_pure(self, status):
        """Same input always gives the same outcome"""
        assert classify_error(status) is classify_error(status)


@pytest.mark.unit
class TestClassifyResponse:
    """Returned responses"""

    @pytest.mark.parametrize("status", [200, 201, 204])
    def test_2xx_succeeds(self, status):
        assert classify_response(ApiResponse(status)) is ChunkOutcome.SUCCESS

    def test_redirect_continues(self):
        assert classify_response(ApiResponse(308)) is ChunkOutcome.CONTINUE

    def test_client_error_is_fatal(self):
        assert classify_response(ApiResponse(404)) is ChunkOutcome.FATAL

    @pytest.mark.parametrize("status", range(100, 600, 7))
    def test_always_one_of_three(self, status):
        assert classify_response(ApiResponse(status)) in set(ChunkOutcome)
