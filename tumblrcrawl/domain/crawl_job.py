from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from tumblrcrawl.domain.crawl_options import CrawlOptions


@dataclass(frozen=True)
class CrawlJob:
    """A blog to crawl plus its options, as read from a job file."""

    blog_id: str
    options: CrawlOptions = field(default_factory=CrawlOptions)
    job_path: Optional[str] = None

    def __repr__(self):
        return f"<CrawlJob blog={self.blog_id} path={self.job_path}>"
