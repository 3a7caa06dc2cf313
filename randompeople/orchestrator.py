#!/usr/bin/env python3
"""
Request orchestration for the two RandomUser clients.

- fetch_via_requests / fetch_via_urllib: one GET through one client, timed
- fetch_both: both clients at once, one shared start time, all-or-nothing result
- on_filter_change: update gender/country and schedule fetch_both on the loop

A single busy flag gates the three fetch operations. A call made while busy is
dropped (not queued) and changes nothing.
"""

import asyncio
import time
from typing import Callable, Iterable, List, Optional, Set

from .api_client import HttpClient, JsonBody, RequestsClient, UrllibClient, build_url
from .config import Settings, load_settings
from .errors import describe_error
from .state import Filter, OrchestratorState, ProfileRecord, Snapshot

COMPARISON_ERROR_PREFIX = "Comparison failed: "


def extract_results(body: JsonBody) -> List[ProfileRecord]:
    # The API answers {"results": [...], "info": {...}}; only "results" is used.
    results = body.get("results") if isinstance(body, dict) else None
    if not isinstance(results, list):
        raise ValueError("response body has no 'results' list")
    return results


class RequestOrchestrator:
    def __init__(
        self,
        clients: Optional[Iterable[HttpClient]] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.settings = settings or load_settings()
        if clients is None:
            clients = (
                RequestsClient(timeout=self.settings.timeout),
                UrllibClient(timeout=self.settings.timeout),
            )
        self.clients = {client.name: client for client in clients}
        if len(self.clients) != 2:
            raise ValueError("exactly two clients with distinct names are required")
        self.path_a, self.path_b = tuple(self.clients)
        self.state = OrchestratorState(
            paths=(self.path_a, self.path_b),
            filter=Filter(country=self.settings.default_country),
        )
        self._clock = clock
        self._tasks: Set[asyncio.Task] = set()

    @property
    def busy(self) -> bool:
        return self.state.busy

    def request_url(self) -> str:
        # read the filter now; a later change does not touch a request already sent
        current = self.state.filter
        return build_url(
            self.settings.api_url, current.gender, current.country, self.settings.results
        )

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()

    def _elapsed_ms(self, start: float) -> float:
        return (self._clock() - start) * 1000.0

    # --------------------------------------------------------------------------------------
    # Fetch operations
    # --------------------------------------------------------------------------------------

    async def fetch_via(self, path: str) -> None:
        if self.state.busy:
            return
        client = self.clients[path]
        self.state.begin(path)
        try:
            start = self._clock()
            body = await client.get(self.request_url())
            records = extract_results(body)
            self.state.record_success(path, records, self._elapsed_ms(start))
        except Exception as exc:
            self.state.record_failure(describe_error(exc))
        finally:
            self.state.finish()

    async def fetch_via_requests(self) -> None:
        await self.fetch_via(self.path_a)

    async def fetch_via_urllib(self) -> None:
        await self.fetch_via(self.path_b)

    async def fetch_both(self) -> None:
        if self.state.busy:
            return
        paths = (self.path_a, self.path_b)
        self.state.begin(*paths)
        try:
            start = self._clock()
            url = self.request_url()
            # both requests are in flight before either is awaited
            bodies = await asyncio.gather(*(self.clients[path].get(url) for path in paths))
            elapsed = self._elapsed_ms(start)
            results = [extract_results(body) for body in bodies]
            # same combined time on both slots: this measures "time to get both"
            for path, records in zip(paths, results):
                self.state.record_success(path, records, elapsed)
        except Exception as exc:
            self.state.record_failure(COMPARISON_ERROR_PREFIX + describe_error(exc))
        finally:
            self.state.finish()

    # --------------------------------------------------------------------------------------
    # Reactive triggers
    # --------------------------------------------------------------------------------------

    def on_filter_change(self, field: str, value: Optional[str]) -> Optional[asyncio.Task]:
        """
        Update one filter field and schedule fetch_both() on the running loop.

        Nothing is scheduled when the value did not change. Raises ValueError for an
        unknown field or gender.
        """
        updated = self.state.filter.with_value(field, value)
        if updated == self.state.filter:
            return None
        loop = asyncio.get_running_loop()  # no loop: raise before the filter changes
        self.state.set_filter(updated)
        return self._schedule(self.fetch_both, loop)

    def load(self) -> asyncio.Task:
        """Initial fetch with the default filter."""
        return self._schedule(self.fetch_both)

    def _schedule(self, operation, loop=None) -> asyncio.Task:
        loop = loop or asyncio.get_running_loop()
        task = loop.create_task(operation())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled fetch to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def shutdown(self) -> None:
        """Cancel scheduled fetches that are still pending and wait for them to stop."""
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
