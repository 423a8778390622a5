"""
Denied license requests.
"""

from dataclasses import dataclass
from typing import Iterable, List

from .events import EventRecord
from .patterns import DENY

DENIAL_HEADER = ["Request", "Product", "Version", "User", "Host", "Reason"]


@dataclass(frozen=True)
class DenialRecord:
    timestamp: str
    product: str
    version: str
    user: str
    host: str
    # Same source column as the request count
    reason: str

    def as_row(self) -> List[str]:
        return [self.timestamp, self.product, self.version, self.user, self.host, self.reason]


def collect_denials(events: Iterable[EventRecord]) -> List[DenialRecord]:
    """DENY events in log order."""
    return [
        DenialRecord(
            timestamp=event.timestamp,
            product=event.product,
            version=event.version,
            user=event.user,
            host=event.host,
            reason=event.count,
        )
        for event in events
        if event.kind == DENY
    ]


def denial_rows(denials: Iterable[DenialRecord]) -> List[List[str]]:
    return [list(DENIAL_HEADER)] + [denial.as_row() for denial in denials]
