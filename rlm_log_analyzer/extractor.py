"""
Event extraction from tokenized report log rows.

Each row is classified by its event keyword and projected through the
kind's column layout into an EventRecord. Report logs usually omit the year
from event dates, so the extractor threads an ExtractionState through the
rows: START lines and bare date marker lines set the year, and every OUT,
IN, DENY and SHUTDOWN date is stamped with it.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .config import AnalyzerConfig
from .events import EventRecord
from .exceptions import EventDataError
from .logging_config import get_logger
from .patterns import (
    DATE_SEPARATOR,
    DENY,
    EVENT_KIND_COLUMN,
    EVENT_SCHEMAS,
    IDENTITY_KINDS,
    NEW_YEAR_DATE,
    PRODUCT,
    SHUTDOWN,
    START,
    YEAR_MARKER_FIELDS,
    YEAR_PATTERN,
    YEAR_STAMPED_KINDS,
    required_fields,
)
from .registry import IdentityRegistry
from .timestamps import hour_minute
from .tokenizer import tokenize

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractionState:
    """Ambient state carried from one row to the next.

    Attributes:
        year: Year stamped onto dates that lack one.
        year_from_log: False while the year is still the configured fallback.
        last_day: MM/DD of the last stamped event, START or date marker.
    """
    year: str
    year_from_log: bool = False
    last_day: Optional[str] = None


@dataclass
class ExtractedLog:
    """Events of one report log plus the tables derived while reading it."""
    events: List[EventRecord] = field(default_factory=list)
    start_events: List[EventRecord] = field(default_factory=list)
    shutdown_events: List[EventRecord] = field(default_factory=list)
    denial_events: List[EventRecord] = field(default_factory=list)
    products: IdentityRegistry = field(default_factory=lambda: IdentityRegistry("product"))
    users: IdentityRegistry = field(default_factory=lambda: IdentityRegistry("user"))
    hosts: IdentityRegistry = field(default_factory=lambda: IdentityRegistry("host"))
    server_name: str = ""
    # Index into events of the last event carrying a date and time
    end_time_index: Optional[int] = None

    @property
    def end_time_event(self) -> Optional[EventRecord]:
        if self.end_time_index is None:
            return None
        return self.events[self.end_time_index]


def split_date(date_field: str) -> List[str]:
    return tokenize(date_field, DATE_SEPARATOR)


def read_year_marker(fields: Sequence[str]) -> Optional[Tuple[str, str]]:
    """Return (year, MM/DD) for a bare `MM/DD/YYYY HH:MM` line, else None.

    Two-field rows whose date does not end in a four digit year are not
    markers.
    """
    if len(fields) != YEAR_MARKER_FIELDS:
        return None
    parts = split_date(fields[0])
    if len(parts) != 3 or not YEAR_PATTERN.fullmatch(parts[2]):
        return None
    return parts[2], DATE_SEPARATOR.join(parts[:2])


def stamp_year(date_field: str, time_field: str,
               state: ExtractionState) -> Tuple[str, ExtractionState]:
    """Append the ambient year to a MM/DD date.

    An event at 01/01 00:00 is written before the line announcing the new
    year, so it advances the year first. Once the log has reached 01/01 the
    year is not advanced again.
    """
    # Deliberately advances once per New Year rather than on every 01/01 00:xx
    # event, so a marker line or several first-minute events count once.
    if (
        date_field == NEW_YEAR_DATE
        and hour_minute(time_field) == ("00", "00")
        and state.last_day != NEW_YEAR_DATE
    ):
        state = replace(state, year=str(int(state.year) + 1))
        logger.debug("Year rollover to %s at %s %s", state.year, date_field, time_field)
    state = replace(state, last_day=date_field)
    return f"{date_field}{DATE_SEPARATOR}{state.year}", state


def project_row(kind: str, fields: Sequence[str], row_number: int) -> Dict[str, str]:
    """Pick the kind's schema columns out of a row.

    Raises:
        EventDataError: If the row is too short for the schema.
    """
    if len(fields) < required_fields(kind):
        raise EventDataError(row_number)
    return {name: fields[column] for name, column in EVENT_SCHEMAS[kind]}


def extract_row(fields: Sequence[str], row_number: int,
                state: ExtractionState) -> Tuple[Optional[EventRecord], ExtractionState]:
    """Turn one tokenized row into an event.

    Returns the record (None for non-event rows) and the state for the
    next row.
    """
    marker = read_year_marker(fields)
    if marker is not None:
        year, day = marker
        logger.debug("Year marker %s on line %d", year, row_number)
        return None, ExtractionState(year=year, year_from_log=True, last_day=day)

    if len(fields) <= EVENT_KIND_COLUMN:
        return None, state
    kind = fields[EVENT_KIND_COLUMN]
    if kind not in EVENT_SCHEMAS:
        return None, state

    values = project_row(kind, fields, row_number)

    if kind == START:
        parts = split_date(values["date"])
        if len(parts) != 3 or not YEAR_PATTERN.fullmatch(parts[2]):
            raise EventDataError(row_number)
        state = ExtractionState(
            year=parts[2],
            year_from_log=True,
            last_day=DATE_SEPARATOR.join(parts[:2]),
        )
    elif kind in YEAR_STAMPED_KINDS:
        values["date"], state = stamp_year(values["date"], values["time"], state)

    return EventRecord(kind=kind, row=row_number, **values), state


class EventExtractor:
    """Builds an ExtractedLog from tokenized rows."""

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()

    def initial_state(self) -> ExtractionState:
        return ExtractionState(year=self.config.fallback_year())

    def extract(self, rows: Sequence[Sequence[str]]) -> ExtractedLog:
        log = ExtractedLog()
        state = self.initial_state()
        warned_year = False

        for row_number, fields in enumerate(rows, start=1):
            record, state = extract_row(fields, row_number, state)
            if record is None:
                continue

            if record.kind in YEAR_STAMPED_KINDS and not state.year_from_log and not warned_year:
                logger.warning(
                    "No year found before line %d, assuming %s", row_number, state.year
                )
                warned_year = True

            self._add(log, record)

        logger.debug(
            "Extracted %d events from %d rows (%d products, %d users, %d hosts)",
            len(log.events),
            len(rows),
            len(log.products),
            len(log.users),
            len(log.hosts),
        )
        return log

    def _add(self, log: ExtractedLog, record: EventRecord) -> None:
        log.events.append(record)
        position = len(log.events) - 1

        if record.kind in IDENTITY_KINDS:
            log.products.add(record.product)
            log.users.add(record.user)
            log.hosts.add(record.host)
        elif record.kind == PRODUCT:
            log.products.add(record.product)

        if record.kind == DENY:
            log.denial_events.append(record)
        elif record.kind == START:
            log.server_name = record.server
            log.start_events.append(record)
        elif record.kind == SHUTDOWN:
            log.shutdown_events.append(record)

        if record.has_timestamp:
            log.end_time_index = position


def extract_events(rows: Sequence[Sequence[str]],
                   config: Optional[AnalyzerConfig] = None) -> ExtractedLog:
    """Convenience wrapper around EventExtractor.extract."""
    return EventExtractor(config).extract(rows)
