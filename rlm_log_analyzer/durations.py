"""
Checkout durations and per-identity totals.

Every OUT is closed by the first later IN with the same server handle or
the first later SHUTDOWN, whichever comes first. Checkouts never closed are
measured up to the last timestamped event of the log and reported as still
checked out. Handles are assumed not to be reused before their checkin.
"""

from bisect import bisect_right
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

import numpy as np

from .events import EventRecord
from .exceptions import EventDataError
from .extractor import ExtractedLog
from .logging_config import get_logger
from .patterns import IN, OUT, SHUTDOWN, STILL_CHECKED_OUT
from .registry import IdentityRegistry
from .timestamps import format_duration, parse_timestamp

logger = get_logger(__name__)

ACTIVITY_HEADER = [
    "Checkout Date/Time",
    "Checkin Date/Time",
    "Product",
    "Version",
    "User",
    "Host",
    "Duration (HH:MM:SS)",
]

# Identity selector (an EventRecord attribute) -> totals table label
IDENTITIES = {
    "user": "User",
    "host": "Host",
}


@dataclass(frozen=True)
class DurationRecord:
    """One checkout and how long it was held."""
    checkout: str
    checkin: Optional[str]
    product: str
    version: str
    user: str
    host: str
    duration: timedelta

    @property
    def still_checked_out(self) -> bool:
        return self.checkin is None

    def as_row(self) -> List[str]:
        return [
            self.checkout,
            self.checkin if self.checkin is not None else STILL_CHECKED_OUT,
            self.product,
            self.version,
            self.user,
            self.host,
            format_duration(self.duration),
        ]


@dataclass
class DurationReport:
    """Duration records plus the [identity][product] totals in seconds."""
    identity: str
    identities: List[str]
    products: List[str]
    records: List[DurationRecord]
    totals: np.ndarray

    def rows(self) -> List[List[str]]:
        return [list(ACTIVITY_HEADER)] + [record.as_row() for record in self.records]

    def total(self, identity: str, product: str) -> timedelta:
        seconds = self.totals[self.identities.index(identity), self.products.index(product)]
        return timedelta(seconds=int(seconds))

    def total_rows(self) -> List[List[str]]:
        header = [IDENTITIES[self.identity]]
        header.extend(f"{product} Duration (HH:MM:SS)" for product in self.products)
        rows = [header]
        for i, name in enumerate(self.identities):
            rows.append([name] + [format_duration(int(s)) for s in self.totals[i]])
        return rows


def event_time(event: EventRecord) -> datetime:
    try:
        return parse_timestamp(event.date, event.time)
    except ValueError:
        raise EventDataError(
            event.row, f"Invalid date/time '{event.timestamp}' on line {event.row}"
        ) from None


class CheckinIndex:
    """Positions of IN events per handle and of SHUTDOWN events."""

    def __init__(self, events: Sequence[EventRecord]):
        self.checkins: Dict[str, List[int]] = defaultdict(list)
        self.shutdowns: List[int] = []
        for position, event in enumerate(events):
            if event.kind == IN:
                self.checkins[event.handle].append(position)
            elif event.kind == SHUTDOWN:
                self.shutdowns.append(position)

    @staticmethod
    def _next_after(positions: List[int], position: int) -> Optional[int]:
        i = bisect_right(positions, position)
        return positions[i] if i < len(positions) else None

    def closing_position(self, position: int, handle: str) -> Optional[int]:
        """Position of the event closing the OUT at `position`, if any."""
        candidates = [
            p
            for p in (
                self._next_after(self.checkins.get(handle, []), position),
                self._next_after(self.shutdowns, position),
            )
            if p is not None
        ]
        return min(candidates) if candidates else None


def _registry(log: ExtractedLog, identity: str) -> IdentityRegistry:
    if identity not in IDENTITIES:
        raise ValueError(f"Unknown identity selector: {identity!r}")
    return log.users if identity == "user" else log.hosts


def reconcile_durations(log: ExtractedLog, identity: str = "user",
                        index: Optional[CheckinIndex] = None) -> DurationReport:
    """Pair every checkout with its close and total the durations.

    Args:
        log: Extracted events and registries.
        identity: "user" or "host", the row key of the totals matrix.
        index: Prebuilt checkin index, shared between passes.
    """
    registry = _registry(log, identity)
    events = log.events
    index = index or CheckinIndex(events)
    totals = np.zeros((len(registry), len(log.products)), dtype=np.int64)
    records = []
    still_out = 0

    for position, event in enumerate(events):
        if event.kind != OUT:
            continue

        close_position = index.closing_position(position, event.handle)
        if close_position is not None:
            close_event = events[close_position]
            checkin = close_event.timestamp
        else:
            close_event = log.end_time_event
            checkin = None
            still_out += 1

        duration = event_time(close_event) - event_time(event)
        row = registry.index(getattr(event, identity))
        totals[row, log.products.index(event.product)] += int(duration.total_seconds())

        records.append(
            DurationRecord(
                checkout=event.timestamp,
                checkin=checkin,
                product=event.product,
                version=event.version,
                user=event.user,
                host=event.host,
                duration=duration,
            )
        )

    logger.debug(
        "Matched %d checkouts by %s (%d still checked out)", len(records), identity, still_out
    )
    return DurationReport(
        identity=identity,
        identities=registry.names,
        products=log.products.names,
        records=records,
        totals=totals,
    )
