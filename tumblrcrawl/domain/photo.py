from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class PhotoRecord:
    """A single photo discovered on a blog.

    Identity is `photo_id` within one blog; the same photo may show up more
    than once during a crawl (reblogs, reposts) and is not deduplicated.
    """

    photo_id: str
    photo_url: str
    tags: Tuple[str, ...] = ()
    author: str = ""
    photo_bytes: Optional[bytes] = None

    def with_metadata(self, tags, author: str) -> "PhotoRecord":
        """Return a copy carrying the given tags and author."""
        return replace(self, tags=tuple(tags), author=author)

    def with_bytes(self, photo_bytes: bytes) -> "PhotoRecord":
        """Return a copy with the downloaded image attached."""
        return replace(self, photo_bytes=photo_bytes)

    def as_dict(self, include_bytes: bool = False) -> dict:
        data = {
            "photo_id": self.photo_id,
            "photo_url": self.photo_url,
            "tags": list(self.tags),
            "author": self.author,
        }
        if include_bytes:
            data["photo_bytes"] = self.photo_bytes
        return data

    def __repr__(self):
        size = len(self.photo_bytes) if self.photo_bytes is not None else None
        return f"<PhotoRecord id={self.photo_id} author={self.author} bytes={size}>"
