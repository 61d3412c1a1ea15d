"""
Video Models

Data classes representing hosted videos and their captions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Video:
    """
    Represents a hosted video record.

    Instances are built from API responses and never mutated: every API
    call returns a fresh Video.
    """

    # Server-assigned identifier, never empty once materialized
    video_id: str

    # Descriptive fields
    title: str
    description: str
    tags: List[str] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)

    # Opaque descriptors of the origin and the derived outputs
    source: Dict[str, Any] = field(default_factory=dict)
    assets: Dict[str, Any] = field(default_factory=dict)

    # Lifecycle timestamps (timezone-aware when present)
    published_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_published(self) -> bool:
        """Check if the video has a publication date"""
        return self.published_at is not None

    @property
    def is_deleted(self) -> bool:
        """Check if the video was deleted"""
        return self.deleted_at is not None

    def to_dict(self) -> dict:
        """Convert back to the wire representation"""
        return {
            "videoId": self.video_id,
            "title": self.title,
            "description": self.description,
            "tags": list(self.tags),
            "metadata": dict(self.metadata),
            "source": self.source,
            "assets": self.assets,
            "publishedAt": (
                self.published_at.isoformat() if self.published_at else None
            ),
            "deletedAt": self.deleted_at.isoformat() if self.deleted_at else None,
        }


@dataclass(frozen=True)
class Caption:
    """A caption track attached to a video"""

    uri: str
    src: str
    srclang: str
    default: bool = False
