import os
from typing import List

import yaml

from tumblrcrawl.domain.crawl_job import CrawlJob
from tumblrcrawl.exceptions import ConfigurationError
from tumblrcrawl.services.crawl_job_parser import CrawlJobParser


class CrawlJobFileStore:
    """Filesystem/YAML IO for crawl job files.

    Responsibility: locate, read, and parse YAML files on disk.
    """

    def __init__(self, *, jobs_dir: str = "jobs", parser: CrawlJobParser = None):
        self.jobs_dir = jobs_dir
        self.parser = parser or CrawlJobParser()

    def list_job_files(self) -> List[str]:
        if not os.path.isdir(self.jobs_dir):
            return []
        return sorted(
            fname
            for fname in os.listdir(self.jobs_dir)
            if fname.endswith(".yml") or fname.endswith(".yaml")
        )

    def _resolve_path(self, job_path: str) -> str:
        if os.path.isabs(job_path) or os.path.exists(job_path):
            return job_path
        return os.path.join(self.jobs_dir, job_path)

    def load(self, job_path: str) -> CrawlJob:
        full_path = self._resolve_path(job_path)
        if not os.path.isfile(full_path):
            raise ConfigurationError(f"crawl job {job_path!r} not found")
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"crawl job {job_path!r} is not valid YAML: {e}") from e
        return self.parser.parse(data=data, job_path=full_path)
