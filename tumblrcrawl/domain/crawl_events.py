"""Event names, payloads and terminal states published by a crawl."""
from enum import Enum
from typing import NamedTuple


class CrawlEvent(str, Enum):
    RECORD = "record"              # one PhotoRecord, in page order
    PAGE_ADVANCE = "page_advance"  # PageAdvance, only on continuing steps
    ENDED = "ended"                # terminal, exactly once on success
    FAILED = "failed"              # terminal, carries the exception


class CrawlStatus(str, Enum):
    RUNNING = "running"
    ENDED = "ended"
    FAILED = "failed"


class PageAdvance(NamedTuple):
    """Payload of a page_advance event: the position the crawl moves to."""
    blog_id: str
    page_number: int
    step_index: int
