import logging
from typing import List, Optional

from tumblrcrawl.domain.photo import PhotoRecord
from tumblrcrawl.domain.posts import PhotosetPost
from tumblrcrawl.services.blog_urls import BlogUrlBuilder
from tumblrcrawl.services.fan_out import map_all
from tumblrcrawl.services.fetcher import DocumentFetcher
from tumblrcrawl.services.photoset_resolver import PhotosetResolver
from tumblrcrawl.services.post_extractor import PostExtractor

logger = logging.getLogger(__name__)


class PageAssembler:
    """Turns one listing page into a flat list of photo records.

    Photosets on the page are resolved concurrently. The output keeps the
    page order of posts, with each photoset's photos expanded in place.
    """

    def __init__(
        self,
        *,
        fetcher: DocumentFetcher,
        post_extractor: PostExtractor,
        photoset_resolver: PhotosetResolver,
        url_builder: BlogUrlBuilder,
        headers: Optional[dict] = None,
        max_workers: Optional[int] = None,
    ):
        self.fetcher = fetcher
        self.post_extractor = post_extractor
        self.photoset_resolver = photoset_resolver
        self.url_builder = url_builder
        self.headers = headers
        self.max_workers = max_workers

    def get_page(self, blog_id: str, page_number: int) -> List[PhotoRecord]:
        url = self.url_builder.page_url(blog_id, page_number)
        document = self.fetcher.fetch(url, headers=self.headers)
        posts = self.post_extractor.extract_posts(document, blog_id, url=url)
        if not posts:
            logger.info("No posts on %s", url)
            return []

        photosets = [post for post in posts if isinstance(post, PhotosetPost)]
        resolved = iter(map_all(self._resolve_photoset, photosets, max_workers=self.max_workers))

        records: List[PhotoRecord] = []
        for post in posts:
            if isinstance(post, PhotosetPost):
                records.extend(next(resolved))
            else:
                records.append(post.to_record())
        logger.info("Assembled %s photos from %s posts on %s", len(records), len(posts), url)
        return records

    def _resolve_photoset(self, post: PhotosetPost) -> List[PhotoRecord]:
        photos = self.photoset_resolver.resolve_photoset(post.photoset_url)
        # The embedding post's metadata always wins.
        return [photo.with_metadata(post.tags, post.author) for photo in photos]
