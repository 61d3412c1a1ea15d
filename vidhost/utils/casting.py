"""
Casting Utilities

Functions and casters turning decoded API payloads into model objects.
Decode failures are reported as MalformedResponse, never as KeyError/TypeError.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from vidhost.errors import MalformedResponse
from vidhost.interfaces.transport_interface import ApiResponse
from vidhost.models.video import Caption, Video


def decode_json(response: ApiResponse) -> Any:
    """
    Decode a response body as JSON.

    Raises:
        MalformedResponse: If the body is not valid JSON
    """
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponse(
            f"Response body is not valid JSON (status {response.status_code}): {e}"
        ) from e


def require_fields(data: Any, fields: List[str], entity: str) -> None:
    """
    Check that every required field is present.

    Raises:
        MalformedResponse: Naming the first missing field
    """
    if not isinstance(data, dict):
        raise MalformedResponse(
            f"Expected a JSON object for {entity}, got {type(data).__name__}"
        )
    for name in fields:
        if name not in data:
            raise MalformedResponse(f"{entity} payload is missing '{name}'")


def from_iso(value: str) -> datetime:
    """
    datetime.fromisoformat that also accepts a trailing "Z" for UTC.

    Raises:
        ValueError: If the value is not ISO-8601
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_timestamp(value: Optional[str], name: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp with offset, e.g. "2023-05-01T12:00:00+00:00".

    No timezone normalization is applied.

    Returns:
        datetime, or None for absent/null values

    Raises:
        MalformedResponse: If the value cannot be parsed or has no offset
    """
    if value is None:
        return None
    try:
        parsed = from_iso(value)
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedResponse(f"Invalid '{name}' timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        raise MalformedResponse(f"'{name}' timestamp has no UTC offset: {value!r}")
    return parsed


def normalize_metadata(value: Any) -> Dict[str, str]:
    """Accept metadata as a mapping or as a list of {"key", "value"} pairs"""
    if isinstance(value, dict):
        return {str(k): str(v) for k, v in value.items()}
    if isinstance(value, list):
        try:
            return {str(item["key"]): str(item["value"]) for item in value}
        except (KeyError, TypeError) as e:
            raise MalformedResponse(f"Invalid metadata entry: {e}") from e
    raise MalformedResponse(f"Invalid metadata: {value!r}")


class VideoRecordCaster:
    """
    Maps decoded video payloads to Video objects.

    Usage:
        caster = VideoRecordCaster()
        video = caster.unmarshal(transport.get("/videos/vi123"))
    """

    REQUIRED_FIELDS = [
        "videoId",
        "title",
        "description",
        "tags",
        "metadata",
        "source",
        "assets",
    ]

    def cast(self, data: Dict[str, Any]) -> Video:
        """
        Build a Video from a decoded payload.

        Raises:
            MalformedResponse: If a required field is missing or invalid
        """
        require_fields(data, self.REQUIRED_FIELDS, "Video")

        video_id = data["videoId"]
        if not video_id:
            raise MalformedResponse("Video payload has an empty 'videoId'")

        return Video(
            video_id=str(video_id),
            title=data["title"],
            description=data["description"],
            tags=list(data["tags"] or []),
            metadata=normalize_metadata(data["metadata"] or {}),
            source=data["source"],
            assets=data["assets"],
            published_at=parse_timestamp(data.get("publishedAt"), "publishedAt"),
            deleted_at=parse_timestamp(data.get("deletedAt"), "deletedAt"),
        )

    def cast_all(self, items: List[Dict[str, Any]]) -> List[Video]:
        """Cast a list of payloads"""
        return [self.cast(item) for item in items]

    def unmarshal(self, response: ApiResponse) -> Video:
        """Decode and cast a response body"""
        return self.cast(decode_json(response))


class CaptionCaster:
    """Maps decoded caption payloads to Caption objects"""

    REQUIRED_FIELDS = ["uri", "src", "srclang", "default"]

    def cast(self, data: Dict[str, Any]) -> Caption:
        require_fields(data, self.REQUIRED_FIELDS, "Caption")
        return Caption(
            uri=data["uri"],
            src=data["src"],
            srclang=data["srclang"],
            default=bool(data["default"]),
        )

    def cast_all(self, items: List[Dict[str, Any]]) -> List[Caption]:
        if not isinstance(items, list):
            raise MalformedResponse(
                f"Expected a list of captions, got {type(items).__name__}"
            )
        return [self.cast(item) for item in items]

    def unmarshal(self, response: ApiResponse) -> Caption:
        return self.cast(decode_json(response))
