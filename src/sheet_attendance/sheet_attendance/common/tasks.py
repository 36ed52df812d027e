from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DetachedTasks:
    """Fire-and-forget runner for best-effort follow-up work.

    A task's exception is logged and its future resolves to False; nothing
    is retried and nothing reaches the request that scheduled it.
    """

    def __init__(self, *, max_workers: int = 4, executor: ThreadPoolExecutor | None = None):
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="detached")

    def submit(self, name: str, fn: Callable[..., Any], *args, **kwargs) -> Future:
        def run():
            try:
                return fn(*args, **kwargs)
            except Exception:
                logger.exception("Detached task %s failed", name)
                return False

        return self._executor.submit(run)

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


class InlineTasks(DetachedTasks):
    """Runs tasks synchronously; same error contract as DetachedTasks."""

    def __init__(self):
        pass

    def submit(self, name: str, fn: Callable[..., Any], *args, **kwargs) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception:
            logger.exception("Detached task %s failed", name)
            future.set_result(False)
        return future

    def shutdown(self, *, wait: bool = True) -> None:
        return None
