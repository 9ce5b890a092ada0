import logging
from typing import List, Optional

from tumblrcrawl.domain.crawl_events import CrawlEvent, CrawlStatus, PageAdvance
from tumblrcrawl.domain.crawl_options import CrawlOptions
from tumblrcrawl.domain.crawl_state import CrawlState
from tumblrcrawl.domain.photo import PhotoRecord
from tumblrcrawl.exceptions import ConfigurationError
from tumblrcrawl.services.fan_out import map_all
from tumblrcrawl.services.fetcher import DocumentFetcher
from tumblrcrawl.services.notifier import CrawlNotifier
from tumblrcrawl.services.page_assembler import PageAssembler

logger = logging.getLogger(__name__)


class CrawlDriver:
    """Walks a blog page by page and publishes what it finds.

    This class owns the crawl control-flow: fetching pages in order,
    downloading images when asked, emitting events, accumulating results
    and deciding when to stop. It does NOT construct its collaborators
    (that stays in the DI layer).

    A driver runs one crawl at a time. `status` and `state` describe the
    most recent crawl and stay readable after it ends or fails.
    """

    def __init__(
        self,
        *,
        page_assembler: PageAssembler,
        fetcher: DocumentFetcher,
        notifier: Optional[CrawlNotifier] = None,
        download_headers: Optional[dict] = None,
        max_workers: Optional[int] = None,
    ):
        self.page_assembler = page_assembler
        self.fetcher = fetcher
        self.notifier = notifier if notifier is not None else CrawlNotifier()
        self.download_headers = download_headers
        self.max_workers = max_workers
        self.status: Optional[CrawlStatus] = None
        self.state: Optional[CrawlState] = None

    def download_photo(self, record: PhotoRecord) -> PhotoRecord:
        photo_bytes = self.fetcher.fetch(record.photo_url, headers=self.download_headers, raw=True)
        return record.with_bytes(photo_bytes)

    def crawl(self, blog_id: str, options: Optional[CrawlOptions] = None) -> Optional[List[PhotoRecord]]:
        """Crawl `blog_id` until an empty page or a configured ceiling.

        Returns the accumulated records when `options.accumulate` is set,
        otherwise None. Any failure emits a `failed` event and is re-raised.
        """
        if blog_id is None or str(blog_id).strip() == "":
            raise ConfigurationError("blog_id is required for crawl")
        options = options or CrawlOptions()
        options.validate()

        self.state = CrawlState(
            blog_id=blog_id,
            page_number=int(options.start_page),
            step_index=int(options.start_step),
        )
        self.status = CrawlStatus.RUNNING
        logger.info(
            "Starting crawl of %s at page %s (step %s)",
            blog_id,
            self.state.page_number,
            self.state.step_index,
        )

        try:
            while True:
                records = self._run_step(self.state, options)
                if not records:
                    logger.info("Blog %s ended at page %s", blog_id, self.state.page_number)
                    break
                if options.accumulate:
                    self.state = self.state.accumulate(records)
                if options.ceiling_reached(self.state.page_number, self.state.step_index):
                    logger.info(
                        "Stopping crawl of %s at page %s (step %s): ceiling reached",
                        blog_id,
                        self.state.page_number,
                        self.state.step_index,
                    )
                    break
                self.state = self.state.advance()
                self.notifier.emit(
                    CrawlEvent.PAGE_ADVANCE,
                    PageAdvance(blog_id, self.state.page_number, self.state.step_index),
                )
        except Exception as e:
            self.status = CrawlStatus.FAILED
            logger.error(
                "Crawl of %s failed at page %s: %s",
                blog_id,
                self.state.page_number,
                e,
                exc_info=True,
            )
            self.notifier.emit(CrawlEvent.FAILED, e)
            raise

        self.status = CrawlStatus.ENDED
        self.notifier.emit(CrawlEvent.ENDED, self.state)
        if options.accumulate:
            return list(self.state.accumulated)
        return None

    def _run_step(self, state: CrawlState, options: CrawlOptions) -> List[PhotoRecord]:
        records = self.page_assembler.get_page(state.blog_id, state.page_number)
        if not records:
            return []

        if options.download_binaries:
            records = map_all(
                self.download_photo,
                records,
                max_workers=self.max_workers,
                thread_name_prefix="tumblrcrawl-download",
            )
            logger.debug("Downloaded %s photos from page %s", len(records), state.page_number)

        for record in records:
            self.notifier.emit(CrawlEvent.RECORD, record)
        return records
