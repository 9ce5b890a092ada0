import pytest
from unittest.mock import MagicMock

from tumblrcrawl.domain import CrawlEvent, CrawlOptions, CrawlState, CrawlStatus, PageAdvance, PhotoRecord
from tumblrcrawl.exceptions import ConfigurationError, TransportError
from tumblrcrawl.services.crawl_driver import CrawlDriver
from tumblrcrawl.services.notifier import CrawlNotifier


def _record_events(notifier):
    events = []
    for event in CrawlEvent:
        notifier.subscribe(event, lambda payload, event=event: events.append((event, payload)))
    return events


def _of(events, kind):
    return [payload for event, payload in events if event == kind]


@pytest.fixture
def driver(site, assembler):
    return CrawlDriver(page_assembler=assembler, fetcher=site, notifier=CrawlNotifier())


def _blog(site, pages, per_page=2):
    """Populate `pages` listing pages of single photos, followed by an empty page."""
    for n in range(1, pages + 1):
        site.add_page("blog", n, *(site.photo(f"{n}-{i}", f"https://img/{n}-{i}.jpg") for i in range(per_page)))
    site.add_page("blog", pages + 1)


def test_step_ceiling_stops_after_two_advances(site, driver):
    _blog(site, pages=5)
    events = _record_events(driver.notifier)

    result = driver.crawl("blog", CrawlOptions(step_ceiling=2, start_step=0))

    assert result is None
    assert _of(events, CrawlEvent.PAGE_ADVANCE) == [PageAdvance("blog", 2, 1), PageAdvance("blog", 3, 2)]
    assert len(_of(events, CrawlEvent.ENDED)) == 1
    assert _of(events, CrawlEvent.FAILED) == []
    assert site.urls_fetched() == [f"https://blog.tumblr.com/page/{n}" for n in (1, 2, 3)]
    assert driver.status == CrawlStatus.ENDED


def test_page_ceiling_and_start_page(site, driver):
    _blog(site, pages=6)
    events = _record_events(driver.notifier)

    driver.crawl("blog", CrawlOptions(start_page=3, page_ceiling=5))

    assert [a.page_number for a in _of(events, CrawlEvent.PAGE_ADVANCE)] == [4, 5]
    assert [a.step_index for a in _of(events, CrawlEvent.PAGE_ADVANCE)] == [1, 2]
    assert [r.photo_id for r in _of(events, CrawlEvent.RECORD)][0] == "3-0"
    assert len(_of(events, CrawlEvent.ENDED)) == 1


def test_zero_post_page_ends_crawl_with_accumulated_records(site, driver):
    _blog(site, pages=2)
    events = _record_events(driver.notifier)

    result = driver.crawl("blog", CrawlOptions(accumulate=True))

    assert [r.photo_id for r in result] == ["1-0", "1-1", "2-0", "2-1"]
    assert _of(events, CrawlEvent.FAILED) == []
    assert len(_of(events, CrawlEvent.ENDED)) == 1
    # no page_advance away from the empty page
    assert _of(events, CrawlEvent.PAGE_ADVANCE) == [PageAdvance("blog", 2, 1), PageAdvance("blog", 3, 2)]


def test_empty_first_page_returns_empty_list(site, driver):
    site.add_page("blog", 1)
    events = _record_events(driver.notifier)
    assert driver.crawl("blog", CrawlOptions(accumulate=True)) == []
    assert len(_of(events, CrawlEvent.ENDED)) == 1
    assert _of(events, CrawlEvent.RECORD) == []


def test_records_are_emitted_before_the_page_advance(site, driver):
    _blog(site, pages=2)
    events = _record_events(driver.notifier)
    driver.crawl("blog")
    kinds = [event for event, _ in events]
    assert kinds == [
        CrawlEvent.RECORD,
        CrawlEvent.RECORD,
        CrawlEvent.PAGE_ADVANCE,
        CrawlEvent.RECORD,
        CrawlEvent.RECORD,
        CrawlEvent.PAGE_ADVANCE,
        CrawlEvent.ENDED,
    ]


def test_ended_payload_is_final_state(site, driver):
    _blog(site, pages=1)
    events = _record_events(driver.notifier)
    driver.crawl("blog")
    (final,) = _of(events, CrawlEvent.ENDED)
    assert isinstance(final, CrawlState)
    assert (final.page_number, final.step_index) == (2, 1)


def test_transport_failure_on_page_two(site, driver):
    _blog(site, pages=3)
    site.add("https://blog.tumblr.com/page/2", TransportError("https://blog.tumblr.com/page/2", status_code=503))
    events = _record_events(driver.notifier)

    with pytest.raises(TransportError):
        driver.crawl("blog", CrawlOptions(accumulate=True))

    failed = _of(events, CrawlEvent.FAILED)
    assert len(failed) == 1
    assert isinstance(failed[0], TransportError)
    assert _of(events, CrawlEvent.ENDED) == []
    assert [r.photo_id for r in _of(events, CrawlEvent.RECORD)] == ["1-0", "1-1"]
    assert [r.photo_id for r in driver.state.accumulated] == ["1-0", "1-1"]
    assert driver.status == CrawlStatus.FAILED


def test_download_binaries_attaches_bytes_to_every_record(site, driver):
    _blog(site, pages=1, per_page=5)
    for i in range(5):
        site.add(f"https://img/1-{i}.jpg", f"image-{i}".encode())
    events = _record_events(driver.notifier)

    result = driver.crawl("blog", CrawlOptions(download_binaries=True, accumulate=True))

    records = _of(events, CrawlEvent.RECORD)
    assert len(records) == 5
    assert [r.photo_bytes for r in records] == [f"image-{i}".encode() for i in range(5)]
    assert result == records


def test_one_failed_download_fails_the_step(site, driver):
    _blog(site, pages=1, per_page=5)
    for i in (0, 1, 3, 4):
        site.add(f"https://img/1-{i}.jpg", b"ok")
    events = _record_events(driver.notifier)

    with pytest.raises(TransportError):
        driver.crawl("blog", CrawlOptions(download_binaries=True))

    assert _of(events, CrawlEvent.RECORD) == []
    assert len(_of(events, CrawlEvent.FAILED)) == 1
    assert _of(events, CrawlEvent.ENDED) == []


def test_download_uses_configured_headers(site, assembler):
    _blog(site, pages=1, per_page=1)
    site.add("https://img/1-0.jpg", b"ok")
    driver = CrawlDriver(page_assembler=assembler, fetcher=site, download_headers={"User-Agent": "ua"})
    driver.crawl("blog", CrawlOptions(download_binaries=True))
    assert ("GET", "https://img/1-0.jpg", {"User-Agent": "ua"}) in site.calls


@pytest.mark.parametrize("blog_id", [None, "", "   "])
def test_missing_blog_id_fails_before_network(site, driver, blog_id):
    events = _record_events(driver.notifier)
    with pytest.raises(ConfigurationError):
        driver.crawl(blog_id)
    assert site.calls == []
    assert events == []


def test_invalid_options_fail_before_network(site, driver):
    with pytest.raises(ConfigurationError):
        driver.crawl("blog", CrawlOptions(start_page=0))
    assert site.calls == []


def test_handler_error_fails_the_crawl(site, driver):
    _blog(site, pages=2)
    events = _record_events(driver.notifier)

    def explode(record):
        raise RuntimeError("consumer broke")

    driver.notifier.subscribe(CrawlEvent.RECORD, explode)
    with pytest.raises(RuntimeError, match="consumer broke"):
        driver.crawl("blog")
    assert len(_of(events, CrawlEvent.FAILED)) == 1
    assert _of(events, CrawlEvent.ENDED) == []


def test_duplicate_photo_ids_are_not_deduplicated(site, driver):
    site.add_page("blog", 1, site.photo("1", "u1"))
    site.add_page("blog", 2, site.photo("1", "u1"))
    site.add_page("blog", 3)
    result = driver.crawl("blog", CrawlOptions(accumulate=True))
    assert [r.photo_id for r in result] == ["1", "1"]


def test_long_blogs_do_not_grow_the_stack():
    pages = 3000
    page_assembler = MagicMock()
    page_assembler.get_page.side_effect = lambda blog_id, n: (
        [PhotoRecord(photo_id=str(n), photo_url=f"u{n}")] if n <= pages else []
    )
    driver = CrawlDriver(page_assembler=page_assembler, fetcher=MagicMock())
    result = driver.crawl("blog", CrawlOptions(accumulate=True))
    assert len(result) == pages
    assert driver.state.page_number == pages + 1
