import logging
from typing import Callable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from tumblrcrawl.domain.posts import PhotosetPost, PostDescriptor, SinglePhotoPost
from tumblrcrawl.exceptions import ExtractionError

logger = logging.getLogger(__name__)

POST_SELECTOR = "article.photo, article.photoset"
TAG_SELECTOR = ".tag-link"
REBLOG_SELECTOR = ".reblog-link"
REBLOG_AUTHOR_ATTR = "data-blog-card-username"
PHOTOSET_FRAME_SELECTOR = "iframe.photoset"


class PostExtractor:
    """Reads photo and photoset posts off a blog listing page.

    Posts are returned in document order, which is the order the blog
    displays them in. An empty page yields an empty list.
    """

    def __init__(self, blog_url_fn: Callable[[str], str]):
        self._blog_url_fn = blog_url_fn

    def extract_posts(self, document, blog_id: str, url: Optional[str] = None) -> List[PostDescriptor]:
        if not isinstance(document, BeautifulSoup):
            raise ExtractionError(
                f"expected a parsed HTML document, got {type(document).__name__}", url
            )

        posts: List[PostDescriptor] = []
        for article in document.select(POST_SELECTOR):
            posts.append(self._extract_post(article, blog_id, url))
        logger.debug("Extracted %s posts for %s (%s)", len(posts), blog_id, url)
        return posts

    def _extract_post(self, article: Tag, blog_id: str, url: Optional[str]) -> PostDescriptor:
        photo_id = article.get("data-post-id")
        if not photo_id:
            raise ExtractionError("post entry is missing data-post-id", url)

        tags = tuple(el.get_text() for el in article.select(TAG_SELECTOR))
        author = self._extract_author(article, blog_id)

        if "photoset" in (article.get("class") or []):
            frame = article.select_one(PHOTOSET_FRAME_SELECTOR)
            src = frame.get("src") if frame is not None else None
            if not src:
                raise ExtractionError(f"photoset post {photo_id} has no photoset frame", url)
            photoset_url = urljoin(self._blog_url_fn(blog_id), src)
            return PhotosetPost(photoset_url=photoset_url, tags=tags, author=author)

        img = article.select_one("img")
        src = img.get("src") if img is not None else None
        if not src:
            raise ExtractionError(f"photo post {photo_id} has no image source", url)
        return SinglePhotoPost(photo_id=photo_id, photo_url=src, tags=tags, author=author)

    def _extract_author(self, article: Tag, blog_id: str) -> str:
        reblog = article.select_one(REBLOG_SELECTOR)
        if reblog is None:
            return blog_id
        # Reblogs credit the original poster.
        return reblog.get(REBLOG_AUTHOR_ATTR) or blog_id
