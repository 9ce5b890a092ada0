import logging
from typing import List, Optional

from tumblrcrawl.domain.photo import PhotoRecord
from tumblrcrawl.exceptions import ExtractionError
from tumblrcrawl.services.fetcher import DocumentFetcher

logger = logging.getLogger(__name__)

PHOTO_ANCHOR_SELECTOR = "a.photoset_photo"
PHOTO_ID_PREFIX = "photoset_link_"


class PhotosetResolver:
    """Flattens a photoset frame into its photos, in frame order.

    Returned records carry no tags or author; the page assembler copies
    those over from the post that embeds the photoset.
    """

    def __init__(self, fetcher: DocumentFetcher, headers: Optional[dict] = None):
        self._fetcher = fetcher
        self._headers = headers

    def resolve_photoset(self, photoset_url: str) -> List[PhotoRecord]:
        document = self._fetcher.fetch(photoset_url, headers=self._headers)
        photos: List[PhotoRecord] = []
        for anchor in document.select(PHOTO_ANCHOR_SELECTOR):
            anchor_id = anchor.get("id") or ""
            if not anchor_id.startswith(PHOTO_ID_PREFIX) or len(anchor_id) == len(PHOTO_ID_PREFIX):
                raise ExtractionError(f"unexpected photoset anchor id {anchor_id!r}", photoset_url)
            img = anchor.select_one("img")
            src = img.get("src") if img is not None else None
            if not src:
                raise ExtractionError(f"photoset anchor {anchor_id!r} has no image", photoset_url)
            photos.append(PhotoRecord(photo_id=anchor_id[len(PHOTO_ID_PREFIX):], photo_url=src))
        logger.debug("Resolved %s photos from %s", len(photos), photoset_url)
        return photos
