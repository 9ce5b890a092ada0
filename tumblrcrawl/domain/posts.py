"""Post descriptors read from a listing page, before photosets are resolved."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from tumblrcrawl.domain.photo import PhotoRecord


@dataclass(frozen=True)
class SinglePhotoPost:
    photo_id: str
    photo_url: str
    tags: Tuple[str, ...]
    author: str

    def to_record(self) -> PhotoRecord:
        return PhotoRecord(
            photo_id=self.photo_id,
            photo_url=self.photo_url,
            tags=self.tags,
            author=self.author,
        )


@dataclass(frozen=True)
class PhotosetPost:
    photoset_url: str
    tags: Tuple[str, ...]
    author: str


PostDescriptor = Union[SinglePhotoPost, PhotosetPost]
