from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def map_all(
    fn: Callable[[T], R],
    items: Iterable[T],
    *,
    max_workers: Optional[int] = None,
    thread_name_prefix: str = "tumblrcrawl",
) -> List[R]:
    """Run `fn` over `items` concurrently and return results in input order.

    Every call is allowed to finish before anything is returned or raised.
    If any call failed, the exception of the earliest failing item is raised
    and no results are returned.
    """
    items = list(items)
    if not items:
        return []
    workers = len(items) if max_workers is None else max(1, min(int(max_workers), len(items)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=thread_name_prefix) as executor:
        futures = [executor.submit(fn, item) for item in items]
        wait(futures)
    return [f.result() for f in futures]
