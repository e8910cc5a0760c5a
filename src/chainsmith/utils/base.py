"""Utilities functions."""

import asyncio
from typing import Any, Coroutine, TypeVar

from chainsmith.configs.defaults import DEFAULT_NUM_WORKERS

T = TypeVar("T")


async def run_jobs(
    jobs: list[Coroutine[Any, Any, T]],
    show_progress: bool = False,
    workers: int = DEFAULT_NUM_WORKERS,
    desc: str | None = None,
) -> list[T]:
    """Run a collection of coroutines with limited concurrency.

    Each job is wrapped by a semaphore-guarded worker so that at most
    ``workers`` jobs run at once. Results come back in the order of ``jobs``.

    Args:
        jobs (list[Coroutine[Any, Any, T]]):
            The coroutines to run.
        show_progress (bool):
            If True, uses ``tqdm.asyncio.tqdm_asyncio.gather`` to display a
            progress bar for the whole collection.
        workers (int):
            Maximum number of concurrently running jobs (must be positive).
        desc (Optional[str]):
            Optional text for the progress bar.

    Returns:
        list[T]: The results of the jobs in input order.

    Raises:
        ValueError: If ``workers`` is not positive.
        Exception: Any exception raised by an individual job propagates from
            the gather call.

    Examples:
        - Limit concurrency without a progress bar
            ```python
            >>> import asyncio
            >>> from chainsmith.utils.base import run_jobs
            >>> async def job(x):
            ...     await asyncio.sleep(0)
            ...     return x + 1
            >>> asyncio.run(run_jobs([job(i) for i in range(4)], workers=2))
            [1, 2, 3, 4]

            ```
    """
    if workers <= 0:
        for job in jobs:
            job.close()
        raise ValueError(f"workers must be positive, got {workers}")

    semaphore = asyncio.Semaphore(workers)

    async def worker(job: Coroutine) -> Any:
        async with semaphore:
            return await job

    pool_jobs = [worker(job) for job in jobs]

    if show_progress:
        from tqdm.asyncio import tqdm_asyncio

        results = await tqdm_asyncio.gather(*pool_jobs, desc=desc)
    else:
        results = await asyncio.gather(*pool_jobs)

    return results
