#!/usr/bin/env python3
"""
State for the orchestrator: the filter, one outcome slot per client, the busy
flag and the shared error slot.

OrchestratorState is only changed through its transition methods
(begin / record_success / record_failure / finish), so every operation's
effect on the state can be checked on its own.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

ProfileRecord = Dict[str, Any]

GENDERS = ("male", "female")
UNSPECIFIED = "unspecified"
FILTER_FIELDS = ("gender", "country")


class OutcomeStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Filter:
    gender: Optional[str] = None  # None = unspecified ("all")
    country: str = "US"

    def with_value(self, name: str, value: Optional[str]) -> "Filter":
        """Return a copy with one field changed. Raises ValueError on bad input."""
        if name not in FILTER_FIELDS:
            raise ValueError(f"unknown filter field: {name!r}")
        if name == "gender":
            if not value or value == UNSPECIFIED:  # "" from an empty <select> too
                value = None
            if value is not None and value not in GENDERS:
                raise ValueError(f"unknown gender: {value!r}")
        elif not value:
            raise ValueError("country must not be empty")
        return replace(self, **{name: value})


@dataclass(frozen=True)
class OutcomeSlot:
    # records and elapsed_ms are always replaced together
    records: Tuple[ProfileRecord, ...] = ()
    elapsed_ms: Optional[float] = None


@dataclass(frozen=True)
class Snapshot:
    filter: Filter
    busy: bool
    error: Optional[str]
    outcomes: Dict[str, OutcomeSlot]
    statuses: Dict[str, OutcomeStatus]


@dataclass
class OrchestratorState:
    paths: Tuple[str, ...] = ("requests", "urllib")
    filter: Filter = field(default_factory=Filter)
    busy: bool = False
    error: Optional[str] = None
    outcomes: Dict[str, OutcomeSlot] = field(default_factory=dict)
    # path -> status of its latest attempt; failure is remembered per attempted path
    _last: Dict[str, OutcomeStatus] = field(default_factory=dict, init=False, repr=False)
    _running: Tuple[str, ...] = field(default=(), init=False, repr=False)

    def __post_init__(self):
        for path in self.paths:
            self.outcomes.setdefault(path, OutcomeSlot())
            self._last.setdefault(path, OutcomeStatus.IDLE)

    # ----- transitions ---------------------------------------------------------

    def begin(self, *paths: str) -> None:
        if self.busy:
            raise RuntimeError("a request cycle is already in flight")
        self._check_paths(paths)
        self.busy = True
        self.error = None
        self._running = paths

    def record_success(self, path: str, records: List[ProfileRecord], elapsed_ms: float) -> None:
        self._check_paths((path,))
        self.outcomes[path] = OutcomeSlot(records=tuple(records), elapsed_ms=elapsed_ms)
        self._last[path] = OutcomeStatus.SUCCESS

    def record_failure(self, message: str) -> None:
        self.error = message
        for path in self._running:
            self._last[path] = OutcomeStatus.FAILURE

    def finish(self) -> None:
        self.busy = False
        self._running = ()

    def set_filter(self, new_filter: Filter) -> None:
        self.filter = new_filter

    # ----- queries -------------------------------------------------------------

    def status(self, path: str) -> OutcomeStatus:
        self._check_paths((path,))
        if path in self._running:
            return OutcomeStatus.LOADING
        return self._last[path]

    def snapshot(self) -> Snapshot:
        return Snapshot(
            filter=self.filter,
            busy=self.busy,
            error=self.error,
            outcomes=dict(self.outcomes),
            statuses={path: self.status(path) for path in self.paths},
        )

    def _check_paths(self, paths) -> None:
        unknown = [p for p in paths if p not in self.outcomes]
        if unknown:
            raise KeyError(f"unknown transport path(s): {unknown}")
