from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")


def fork_join(tasks: Sequence[Callable[[], T]], *, name: str = "vorostat") -> List[T]:
    """Run every task on its own thread and block until all have finished.

    Results come back in task order. The first exception raised by a task is
    re-raised here after the barrier.
    """
    if not tasks:
        return []
    with ThreadPoolExecutor(max_workers=len(tasks), thread_name_prefix=name) as ex:
        futs = [ex.submit(task) for task in tasks]
    return [f.result() for f in futs]
