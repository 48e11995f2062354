"""Fan-out of one resolved command to several target nodes.

Each target is rendered by its own worker. Results are written into a slot
indexed by the target's position, so the output follows the order the
caller gave, not completion order.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from .tree import Resolution


log = logging.getLogger(__name__)


class BroadcastExecutor:
    """Render one Resolution for many targets concurrently.

    By default every target gets its own worker, so a broadcast takes as
    long as its slowest target. ``max_workers`` is an optional ceiling;
    targets beyond it wait for a free worker.
    """

    def __init__(self, max_workers: Optional[int] = None):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers

    def _worker_count(self, targets: int) -> int:
        if self.max_workers is None:
            return targets
        return min(self.max_workers, targets)

    def collect(self, resolution: Resolution, targets: Sequence[str]) -> List[Tuple[str, str]]:
        """Return ``[(target, rendered_text), ...]`` in target order."""
        if len(targets) == 1:
            return [(targets[0], resolution.for_target(targets[0]).render())]

        slots: List[Optional[str]] = [None] * len(targets)

        def _work(index: int) -> None:
            slots[index] = resolution.for_target(targets[index]).render()

        workers = self._worker_count(len(targets))
        log.debug("Broadcasting %s to %d targets on %d workers", resolution.command, len(targets), workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="broadcast") as pool:
            futures = [pool.submit(_work, i) for i in range(len(targets))]
            for future in futures:
                future.result()

        return [(t, text or "") for t, text in zip(targets, slots)]

    def run(self, resolution: Resolution, targets: Sequence[str]) -> str:
        """Render and join the results into a single response.

        One target returns the bare text. Several targets prefix every line
        with ``Node <identity>: ``, including each line of a multi-line text.
        """
        if not targets:
            return ""
        results = self.collect(resolution, targets)
        if len(results) == 1:
            return results[0][1]
        return "\n".join(
            f"Node {target}: {line}"
            for target, text in results
            for line in text.split("\n")
        )


__all__ = ["BroadcastExecutor"]
