import argparse
import json
import logging
import os
import re
import sys
from dataclasses import replace
from urllib.parse import urlparse

from tumblrcrawl.container import Container
from tumblrcrawl.domain import CrawlEvent, CrawlJob, CrawlOptions, PhotoRecord
from tumblrcrawl.exceptions import TumblrCrawlError

logger = logging.getLogger("tumblrcrawl.run")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_OPTION_FLAGS = ("start_page", "start_step", "step_ceiling", "page_ceiling")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Crawl photo posts from a Tumblr blog")
    target = p.add_mutually_exclusive_group(required=True)
    target.add_argument("--blog", help="Blog subdomain to crawl")
    target.add_argument("--job", help="YAML crawl job file (absolute or relative to the jobs dir)")
    target.add_argument("--all-jobs", action="store_true", help="Run every job file in the jobs dir")
    options = p.add_argument_group("crawl options", "Only valid with --blog; job files carry their own options")
    options.add_argument("--start-page", type=int, default=None, help="First page to fetch (default: 1)")
    options.add_argument("--start-step", type=int, default=None, help="Step index of the first page (default: 0)")
    options.add_argument("--step-ceiling", type=int, default=None)
    options.add_argument("--page-ceiling", type=int, default=None)
    p.add_argument("--download-dir", default=None,
                   help="If set, downloads images and writes them to this folder")
    p.add_argument("--out-jsonl", default=None, help="Append one JSON line per photo to this file")
    p.add_argument("--username", default=None)
    p.add_argument("--password", default=None)
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args(argv)
    if not args.blog:
        given = [name for name in _OPTION_FLAGS if getattr(args, name) is not None]
        if given:
            flags = ", ".join("--" + name.replace("_", "-") for name in given)
            p.error(f"{flags} only apply to --blog; set them in the job file instead")
    return args


def photo_filename(record: PhotoRecord) -> str:
    """File name for a downloaded photo, reduced to a single safe path component."""
    ext = os.path.splitext(urlparse(record.photo_url).path)[1]
    ext = _UNSAFE_FILENAME_CHARS.sub("", ext) or ".jpg"
    stem = _UNSAFE_FILENAME_CHARS.sub("_", str(record.photo_id)).lstrip(".")
    return f"{stem or 'photo'}{ext}"


def photo_path(download_dir: str, record: PhotoRecord) -> str:
    root = os.path.realpath(download_dir)
    path = os.path.realpath(os.path.join(root, photo_filename(record)))
    if os.path.dirname(path) != root:
        raise ValueError(f"refusing to write {record.photo_id!r} outside {download_dir}")
    return path


def build_jobs(args, container: Container) -> list:
    store = container.crawl_job_store()
    if args.job:
        return [store.load(args.job)]
    if args.all_jobs:
        return [store.load(fname) for fname in store.list_job_files()]
    options = CrawlOptions(
        start_page=args.start_page if args.start_page is not None else 1,
        start_step=args.start_step if args.start_step is not None else 0,
        download_binaries=args.download_dir is not None,
        step_ceiling=args.step_ceiling,
        page_ceiling=args.page_ceiling,
    )
    return [CrawlJob(blog_id=args.blog, options=options)]


def run_job(job: CrawlJob, container: Container, args) -> bool:
    driver = container.crawl_driver()
    out = None

    def on_record(record: PhotoRecord):
        if out is not None:
            out.write(json.dumps(record.as_dict(), ensure_ascii=False) + "\n")
        if args.download_dir and record.photo_bytes is not None:
            with open(photo_path(args.download_dir, record), "wb") as f:
                f.write(record.photo_bytes)

    def on_page_advance(advance):
        logger.info("%s: moving to page %s (step %s)", advance.blog_id, advance.page_number, advance.step_index)

    driver.notifier.subscribe(CrawlEvent.RECORD, on_record)
    driver.notifier.subscribe(CrawlEvent.PAGE_ADVANCE, on_page_advance)

    options = job.options
    if args.download_dir and not options.download_binaries:
        options = replace(options, download_binaries=True)
    try:
        if args.out_jsonl:
            out = open(args.out_jsonl, "a", encoding="utf-8")
        if args.download_dir:
            os.makedirs(args.download_dir, exist_ok=True)
        driver.crawl(job.blog_id, options)
    except TumblrCrawlError as e:
        logger.error("Crawl of %s failed: %s", job.blog_id, e)
        return False
    except Exception:
        # output errors raised from our own handlers
        logger.exception("Crawl of %s failed", job.blog_id)
        return False
    finally:
        if out is not None:
            out.close()
    logger.info("Crawl of %s finished", job.blog_id)
    return True


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    container = Container()

    try:
        jobs = build_jobs(args, container)
        if args.username:
            result = container.login_service().login(args.username, args.password or "")
            logger.info("Login done (already logged in: %s)", result.already_logged_in)
    except TumblrCrawlError as e:
        logger.error("%s", e)
        return 1

    ok = True
    for job in jobs:
        ok = run_job(job, container, args) and ok
    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main())
