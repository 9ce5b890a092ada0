import os
from typing import Optional

from tumblrcrawl.domain.crawl_job import CrawlJob
from tumblrcrawl.domain.crawl_options import CrawlOptions
from tumblrcrawl.exceptions import ConfigurationError

_INT_KEYS = ("start_page", "start_step", "step_ceiling", "page_ceiling")


class CrawlJobParser:
    """Parse a YAML dict into a CrawlJob.

    Responsibility: schema/validation for YAML job files.
    It does NOT perform filesystem IO.
    """

    def parse(self, *, data: dict, job_path: Optional[str] = None) -> CrawlJob:
        if not isinstance(data, dict):
            raise ConfigurationError(f"crawl job {job_path!r} must be a mapping")
        blog_id = data.get("blog")
        if blog_id is None or str(blog_id).strip() == "":
            raise ConfigurationError(f"crawl job {job_path!r} is missing 'blog'")

        values = {}
        for key in _INT_KEYS:
            raw = data.get(key)
            if raw is None:
                continue
            try:
                values[key] = int(raw)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"crawl job {job_path!r}: invalid {key} {raw!r}") from e

        options = CrawlOptions(
            download_binaries=bool(data.get("download_binaries", False)),
            accumulate=bool(data.get("accumulate", False)),
            **values,
        )
        options.validate()
        return CrawlJob(
            blog_id=str(blog_id).strip(),
            options=options,
            job_path=os.path.basename(job_path) if job_path else None,
        )
