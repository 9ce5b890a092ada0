from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tumblrcrawl.exceptions import ConfigurationError


@dataclass(frozen=True)
class CrawlOptions:
    """Settings for a single blog crawl.

    Ceilings are inclusive: the crawl ends after processing the step whose
    `step_index` (or page whose `page_number`) reaches the ceiling. Leaving
    both unset runs until the blog returns an empty page.
    """

    start_page: int = 1
    start_step: int = 0
    download_binaries: bool = False
    accumulate: bool = False
    step_ceiling: Optional[int] = None
    page_ceiling: Optional[int] = None

    def validate(self) -> None:
        start_page = _as_int("start_page", self.start_page)
        start_step = _as_int("start_step", self.start_step)
        step_ceiling = _as_int("step_ceiling", self.step_ceiling)
        page_ceiling = _as_int("page_ceiling", self.page_ceiling)
        if start_page is None or start_page < 1:
            raise ConfigurationError(f"start_page must be >= 1, got {self.start_page}")
        if start_step is None or start_step < 0:
            raise ConfigurationError(f"start_step must be >= 0, got {self.start_step}")
        if step_ceiling is not None and step_ceiling < 0:
            raise ConfigurationError(f"step_ceiling must be >= 0, got {self.step_ceiling}")
        if page_ceiling is not None and page_ceiling < 1:
            raise ConfigurationError(f"page_ceiling must be >= 1, got {self.page_ceiling}")

    def ceiling_reached(self, page_number: int, step_index: int) -> bool:
        if self.step_ceiling is not None and step_index >= self.step_ceiling:
            return True
        if self.page_ceiling is not None and page_number >= self.page_ceiling:
            return True
        return False


def _as_int(name: str, value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e
