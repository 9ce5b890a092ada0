import threading

import pytest
from bs4 import BeautifulSoup

from tumblrcrawl.exceptions import TransportError
from tumblrcrawl.services.blog_urls import BlogUrlBuilder
from tumblrcrawl.services.page_assembler import PageAssembler
from tumblrcrawl.services.photoset_resolver import PhotosetResolver
from tumblrcrawl.services.post_extractor import PostExtractor


class FakeSite:
    """In-memory stand-in for the remote blog, shaped like a DocumentFetcher."""

    def __init__(self):
        self.responses = {}
        self.calls = []
        self._lock = threading.Lock()

    def add(self, url, body):
        self.responses[url] = body

    def add_page(self, blog_id, page_number, *articles):
        html = "<html><body><section id='posts'>" + "".join(articles) + "</section></body></html>"
        self.add(f"https://{blog_id}.tumblr.com/page/{page_number}", html)

    def add_photoset(self, url, photos):
        anchors = "".join(
            f"<a class='photoset_photo' id='photoset_link_{pid}' href='#'><img src='{src}'></a>"
            for pid, src in photos
        )
        self.add(url, f"<html><body><div class='photoset'>{anchors}</div></body></html>")

    @staticmethod
    def photo(post_id, src, tags=(), reblog_author=None):
        return (
            f"<article class='photo' data-post-id='{post_id}'>"
            f"<img src='{src}'>{_tags(tags)}{_reblog(reblog_author)}</article>"
        )

    @staticmethod
    def photoset(post_id, frame_src, tags=(), reblog_author=None):
        return (
            f"<article class='photoset' data-post-id='{post_id}'>"
            f"<iframe class='photoset' src='{frame_src}'></iframe>"
            f"{_tags(tags)}{_reblog(reblog_author)}</article>"
        )

    def fetch(self, url, *, headers=None, method="GET", data=None, raw=False, tolerate_status=False):
        with self._lock:
            self.calls.append((method, url, headers))
        if url not in self.responses:
            raise TransportError(url, status_code=404)
        body = self.responses[url]
        if isinstance(body, Exception):
            raise body
        if raw:
            return body if isinstance(body, bytes) else body.encode("utf-8")
        return BeautifulSoup(body, "html.parser")

    def urls_fetched(self):
        return [url for _, url, _ in self.calls]


def _tags(tags):
    if not tags:
        return ""
    return "<div class='tags'>" + "".join(f"<a class='tag-link' href='#'>{t}</a>" for t in tags) + "</div>"


def _reblog(author):
    if author is None:
        return ""
    return f"<a class='reblog-link' data-blog-card-username='{author}' href='#'>reblog</a>"


@pytest.fixture
def site():
    return FakeSite()


@pytest.fixture
def url_builder():
    return BlogUrlBuilder()


@pytest.fixture
def assembler(site, url_builder):
    return PageAssembler(
        fetcher=site,
        post_extractor=PostExtractor(blog_url_fn=url_builder.blog_url),
        photoset_resolver=PhotosetResolver(site),
        url_builder=url_builder,
    )
