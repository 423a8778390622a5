"""
Event data classes for RLM report log analysis.
"""

from dataclasses import dataclass
from typing import List, Optional

from .patterns import EVENT_SCHEMAS, TIMESTAMPED_KINDS


@dataclass(frozen=True)
class EventRecord:
    """A normalized report log event.

    Only the fields of the kind's schema are populated, the rest stay None.
    Stamped dates read MM/DD/YYYY.

    Attributes:
        kind: Event keyword (OUT, IN, DENY, START, SHUTDOWN or PRODUCT).
        row: 1-based line number the event was read from.
        date: Event date.
        time: Event time (HH:MM:SS, or HH:MM for denials).
        product: Product name.
        version: Product version.
        user: User name.
        host: Host name.
        count: Self-reported licenses in use (OUT/IN), requested count (DENY)
            or configured license count (PRODUCT).
        handle: Server handle linking a checkin to its checkout.
        reserved: Self-reported reserved licenses in use.
        reason: Denial reason.
        server: License server host name (START).
        limit: Configured reserved license limit (PRODUCT).
    """

    kind: str
    row: int = 0
    date: Optional[str] = None
    time: Optional[str] = None
    product: Optional[str] = None
    version: Optional[str] = None
    user: Optional[str] = None
    host: Optional[str] = None
    count: Optional[str] = None
    handle: Optional[str] = None
    reserved: Optional[str] = None
    reason: Optional[str] = None
    server: Optional[str] = None
    limit: Optional[str] = None

    @property
    def timestamp(self) -> str:
        """Date and time as shown in the reports."""
        return f"{self.date} {self.time}"

    @property
    def has_timestamp(self) -> bool:
        return self.kind in TIMESTAMPED_KINDS

    def columns(self) -> List[str]:
        """Kind followed by the schema fields, in schema order."""
        return [self.kind] + [getattr(self, name) for name, _ in EVENT_SCHEMAS[self.kind]]
