from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Tuple

from tumblrcrawl.domain.photo import PhotoRecord


@dataclass(frozen=True)
class CrawlState:
    """Position of one crawl, derived afresh for every page step."""

    blog_id: str
    page_number: int = 1
    step_index: int = 0
    accumulated: Tuple[PhotoRecord, ...] = ()

    def advance(self) -> "CrawlState":
        return replace(self, page_number=self.page_number + 1, step_index=self.step_index + 1)

    def accumulate(self, records: Sequence[PhotoRecord]) -> "CrawlState":
        return replace(self, accumulated=self.accumulated + tuple(records))
