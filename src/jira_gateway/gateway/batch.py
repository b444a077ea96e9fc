"""Concurrent execution of independent Jira calls."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from jira_gateway.core.logging import get_logger
from jira_gateway.remote.client import JiraClient
from jira_gateway.remote.models import ErrorKind, Failure, RemoteOutcome, RemoteRequest

logger = get_logger(__name__)


@dataclass(frozen=True)
class BatchItemResult:
    index: int
    item: Any
    outcome: RemoteOutcome

    @property
    def ok(self) -> bool:
        return self.outcome.ok


class BatchExecutor:
    """Runs one Jira call per item and collects every outcome.

    Items never affect each other: a failing or slow item does not cancel
    its siblings, and results come back in input order.
    """

    def __init__(self, client: JiraClient, max_concurrency: int | None = None):
        self.client = client
        self.max_concurrency = max_concurrency or None
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def run(
        self,
        items: Sequence[Any],
        build_request: Callable[[Any], RemoteRequest],
    ) -> list[BatchItemResult]:
        """Execute ``build_request(item)`` for every item concurrently.

        Args:
            items: Batch items, in caller order
            build_request: Pure function from an item to its request

        Returns:
            One result per item, in the same order as ``items``
        """
        requests = [build_request(item) for item in items]
        logger.info(f"Running batch of {len(requests)} Jira calls")

        outcomes = await asyncio.gather(
            *(self._call(request) for request in requests),
            return_exceptions=True,
        )

        results = []
        for index, (item, outcome) in enumerate(zip(items, outcomes)):
            if isinstance(outcome, BaseException):
                outcome = Failure(ErrorKind.UNKNOWN, str(outcome) or type(outcome).__name__)
            results.append(BatchItemResult(index=index, item=item, outcome=outcome))

        failed = sum(1 for result in results if not result.ok)
        logger.info(f"Batch finished: {len(results) - failed} succeeded, {failed} failed")
        return results

    async def _call(self, request: RemoteRequest) -> RemoteOutcome:
        if self._semaphore is None:
            return await self.client.call(request)
        async with self._semaphore:
            return await self.client.call(request)
