"""
Data models: the structure of our data.
Apps come from the Steam catalog; screenshots come from Steam Community pages.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from steamshot.parsers import coerce_app_id, parse_size


@dataclass(frozen=True)
class App:
    """A Steam app, like a video game, identified by its numeric app ID."""
    id: int
    name: Optional[str] = None

    def __post_init__(self):
        # "377160" and 377160 are the same app
        object.__setattr__(self, "id", coerce_app_id(self.id))

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(eq=False)
class Screenshot:
    """
    A screenshot a Steam user uploaded.

    The listing page gives the title, thumbnail and uploader; the remaining
    fields (date onwards) are only known after its details page is scraped.
    """
    details_url: str
    title: Optional[str] = None
    medium_url: Optional[str] = None       # thumbnail, as shown in the listing
    full_size_url: Optional[str] = None    # always derived from medium_url
    user_name: Optional[str] = None
    user_url: Optional[str] = None
    date: Optional[datetime] = None
    file_size: Optional[str] = None        # as displayed, e.g. "0.547 MB"
    width: Optional[int] = None
    height: Optional[int] = None
    like_count: Optional[int] = None
    comment_count: Optional[int] = None
    app: Optional[App] = None              # set by the listing flow only

    def __eq__(self, other):
        if not isinstance(other, Screenshot):
            return NotImplemented
        return self.details_url == other.details_url

    def __hash__(self):
        return hash(self.details_url)

    @property
    def file_size_in_bytes(self) -> Optional[int]:
        """file_size as an integer byte count, e.g. "0.547 MB" -> 547000."""
        if self.file_size is None:
            return None
        return parse_size(self.file_size)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "details_url": self.details_url,
            "full_size_url": self.full_size_url,
            "medium_url": self.medium_url,
            "width": self.width,
            "height": self.height,
            "file_size": self.file_size,
            "user_name": self.user_name,
            "user_url": self.user_url,
            "date": self.date.isoformat() if self.date else None,
            "like_count": self.like_count,
            "comment_count": self.comment_count,
            "app": self.app.to_dict() if self.app else None,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
