"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from tumblrcrawl import config as env
from tumblrcrawl.services.blog_session import BlogSession
from tumblrcrawl.services.blog_urls import BlogUrlBuilder
from tumblrcrawl.services.crawl_driver import CrawlDriver
from tumblrcrawl.services.crawl_job_parser import CrawlJobParser
from tumblrcrawl.services.crawl_job_store import CrawlJobFileStore
from tumblrcrawl.services.fetcher import HttpDocumentFetcher
from tumblrcrawl.services.http_service import HttpService
from tumblrcrawl.services.login_service import LoginService
from tumblrcrawl.services.notifier import CrawlNotifier
from tumblrcrawl.services.page_assembler import PageAssembler
from tumblrcrawl.services.photoset_resolver import PhotosetResolver
from tumblrcrawl.services.post_extractor import PostExtractor


# Environment variables used by the container (read via `tumblrcrawl.config` helpers).
#
# USER_AGENT (str, default: mobile Safari UA)
#   User-Agent sent with page and image requests.
#
# MOBILE_USER_AGENT (str, default: same as USER_AGENT)
#   User-Agent sent with XHR-style listing and photoset requests.
#
# PROXY_URL (str | optional)
#   Proxy used for both http and https requests.
#
# HTTP_TIMEOUT (float seconds, default: 30)
#   Timeout for every outbound HTTP request.
#
# TUMBLRCRAWL_BLOG_URL_TEMPLATE (str, default: "https://{blog_id}.tumblr.com")
#   Base URL of a blog; listing pages live under "<base>/page/<n>".
#
# TUMBLRCRAWL_MAX_WORKERS (int | optional)
#   Caps the thread pools used for photoset resolution and image downloads.
#   Unset means one thread per task on a page.
#
# TUMBLRCRAWL_JOBS_DIR (str, default: "jobs")
#   Directory holding YAML crawl job files.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "MOBILE_USER_AGENT": env.MOBILE_USER_AGENT,
    "PROXY_URL": env.PROXY_URL,
    "HTTP_TIMEOUT": env.HTTP_TIMEOUT,
    "TUMBLRCRAWL_BLOG_URL_TEMPLATE": env.BLOG_URL_TEMPLATE,
    "TUMBLRCRAWL_MAX_WORKERS": env.MAX_WORKERS,
    "TUMBLRCRAWL_JOBS_DIR": env.get_str_env("TUMBLRCRAWL_JOBS_DIR", "jobs"),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for tumblrcrawl."""

    config = providers.Configuration(default=ENV)

    # One session per container: cookies from login are shared by every crawl it builds.
    blog_session = providers.Singleton(
        BlogSession,
        user_agent=config.USER_AGENT,
        mobile_user_agent=config.MOBILE_USER_AGENT,
        proxy_url=config.PROXY_URL,
    )

    http_service = providers.Singleton(
        HttpService,
        http_client=blog_session.provided.request,
        timeout=config.HTTP_TIMEOUT.as_(float),
    )

    document_fetcher = providers.Singleton(
        HttpDocumentFetcher,
        http_service=http_service,
    )

    url_builder = providers.Singleton(
        BlogUrlBuilder,
        template=config.TUMBLRCRAWL_BLOG_URL_TEMPLATE.as_(str),
    )

    post_extractor = providers.Singleton(
        PostExtractor,
        blog_url_fn=url_builder.provided.blog_url,
    )

    photoset_resolver = providers.Singleton(
        PhotosetResolver,
        fetcher=document_fetcher,
        headers=blog_session.provided.xhr_headers,
    )

    page_assembler = providers.Singleton(
        PageAssembler,
        fetcher=document_fetcher,
        post_extractor=post_extractor,
        photoset_resolver=photoset_resolver,
        url_builder=url_builder,
        headers=blog_session.provided.xhr_headers,
        max_workers=config.TUMBLRCRAWL_MAX_WORKERS,
    )

    login_service = providers.Factory(
        LoginService,
        fetcher=document_fetcher,
        session=blog_session,
    )

    crawl_job_store = providers.Singleton(
        CrawlJobFileStore,
        jobs_dir=config.TUMBLRCRAWL_JOBS_DIR.as_(str),
        parser=providers.Factory(CrawlJobParser),
    )

    # Each driver gets its own notifier so concurrent crawls never share handlers.
    crawl_driver = providers.Factory(
        CrawlDriver,
        page_assembler=page_assembler,
        fetcher=document_fetcher,
        notifier=providers.Factory(CrawlNotifier),
        download_headers=blog_session.provided.headers,
        max_workers=config.TUMBLRCRAWL_MAX_WORKERS,
    )
