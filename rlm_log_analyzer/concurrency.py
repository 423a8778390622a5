"""
Concurrent license usage over time.

The event stream is replayed in order. Each OUT, IN and SHUTDOWN emits one
snapshot row holding, for every product: licenses in use (as reported by
the server), unique users holding the product, the configured license
limit, reserved licenses in use and the reserved limit.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .events import EventRecord
from .extractor import ExtractedLog
from .logging_config import get_logger
from .patterns import IN, OUT, PRODUCT, SHUTDOWN

logger = get_logger(__name__)

USAGE_COLUMNS = (
    "Floating Licenses in use",
    "Total Licenses in use",
    "Floating Licenses Limit",
    "Reserved Licenses in use",
    "Reserved Licenses Limit",
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def to_int(value: Optional[str]) -> int:
    """Leading integer of a count field, 0 when there is none."""
    if not value:
        return 0
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class ProductUsage:
    """One product's block of a snapshot row, as display strings."""
    in_use: str
    unique_users: str
    limit: str
    reserved_in_use: str
    reserved_limit: str

    def as_row(self) -> List[str]:
        return [self.in_use, self.unique_users, self.limit, self.reserved_in_use, self.reserved_limit]


@dataclass(frozen=True)
class UsageSnapshot:
    timestamp: str
    usage: tuple

    def as_row(self) -> List[str]:
        row = [self.timestamp]
        for block in self.usage:
            row.extend(block.as_row())
        return row


@dataclass
class ConcurrencyReport:
    """Snapshot rows plus the per-product state after the last event."""
    products: List[str]
    snapshots: List[UsageSnapshot] = field(default_factory=list)
    final: List[ProductUsage] = field(default_factory=list)

    def header(self) -> List[str]:
        header = ["Date/Time"]
        for product in self.products:
            header.extend(f"{product} {column}" for column in USAGE_COLUMNS)
        return header

    def rows(self) -> List[List[str]]:
        return [self.header()] + [snapshot.as_row() for snapshot in self.snapshots]


class ConcurrencyAccumulator:
    """Replays events and tracks outstanding checkouts per user and product."""

    def __init__(self, log: ExtractedLog):
        self.log = log
        n_products = len(log.products)

        self.live_counts = np.zeros((len(log.users), n_products), dtype=np.int64)
        self.unique_users = np.zeros(n_products, dtype=np.int64)
        self.in_use = ["0"] * n_products
        self.reserved_in_use = ["0"] * n_products
        self.limits = ["0"] * n_products
        self.reserved_limits = ["0"] * n_products

        self.report = ConcurrencyReport(products=log.products.names)

    def run(self) -> ConcurrencyReport:
        for event in self.log.events:
            if event.kind == OUT:
                self._checkout(event)
            elif event.kind == IN:
                self._checkin(event)
            elif event.kind == SHUTDOWN:
                self._shutdown(event)
            elif event.kind == PRODUCT:
                self._product(event)

        self.report.final = self._usage()
        logger.debug("Recorded %d concurrency snapshots", len(self.report.snapshots))
        return self.report

    def _indices(self, event: EventRecord):
        return (
            self.log.users.index(event.user),
            self.log.products.index(event.product),
        )

    def _checkout(self, event: EventRecord) -> None:
        user, product = self._indices(event)
        self.in_use[product] = event.count
        self.live_counts[user, product] += 1
        if self.live_counts[user, product] == 1:
            self.unique_users[product] += 1
        self.reserved_in_use[product] = event.reserved
        self._snapshot(event)

    def _checkin(self, event: EventRecord) -> None:
        user, product = self._indices(event)
        self.in_use[product] = event.count

        # The log may start with licenses already out, so never go below zero
        if self.live_counts[user, product] > 0:
            self.live_counts[user, product] -= 1
        if self.live_counts[user, product] == 0 and self.unique_users[product] > 0:
            self.unique_users[product] -= 1

        if to_int(self.in_use[product]) > 0 and self.unique_users[product] == 0:
            # Licenses checked out before the log started: their holders are
            # unknown, so report at least one user for this row only.
            self.unique_users[product] = 1
            self._snapshot(event)
            self.unique_users[product] = 0
        else:
            self._snapshot(event)

    def _shutdown(self, event: EventRecord) -> None:
        self.live_counts[:, :] = 0
        self.unique_users[:] = 0
        self.in_use = ["0"] * len(self.in_use)
        self._snapshot(event)

    def _product(self, event: EventRecord) -> None:
        product = self.log.products.index(event.product)
        self.limits[product] = event.count
        self.reserved_limits[product] = event.limit

    def _usage(self) -> List[ProductUsage]:
        return [
            ProductUsage(
                in_use=self.in_use[i],
                unique_users=str(int(self.unique_users[i])),
                limit=self.limits[i],
                reserved_in_use=self.reserved_in_use[i],
                reserved_limit=self.reserved_limits[i],
            )
            for i in range(len(self.in_use))
        ]

    def _snapshot(self, event: EventRecord) -> None:
        self.report.snapshots.append(UsageSnapshot(event.timestamp, tuple(self._usage())))


def accumulate_concurrency(log: ExtractedLog) -> ConcurrencyReport:
    """Build the concurrent usage table for an extracted log."""
    return ConcurrencyAccumulator(log).run()
