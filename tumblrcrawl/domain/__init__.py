"""Domain objects for tumblrcrawl - explicit re-exports to satisfy linters."""
from .photo import PhotoRecord as PhotoRecord
from .posts import SinglePhotoPost as SinglePhotoPost
from .posts import PhotosetPost as PhotosetPost
from .posts import PostDescriptor as PostDescriptor
from .crawl_options import CrawlOptions as CrawlOptions
from .crawl_state import CrawlState as CrawlState
from .crawl_events import CrawlEvent as CrawlEvent
from .crawl_events import CrawlStatus as CrawlStatus
from .crawl_events import PageAdvance as PageAdvance
from .crawl_job import CrawlJob as CrawlJob

__all__ = [
    "PhotoRecord",
    "SinglePhotoPost",
    "PhotosetPost",
    "PostDescriptor",
    "CrawlOptions",
    "CrawlState",
    "CrawlEvent",
    "CrawlStatus",
    "PageAdvance",
    "CrawlJob",
]
