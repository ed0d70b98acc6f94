"""
Turn fetched match and training-session records into timeline events.

Only sessions the target player attended become events. Every date is parsed
here, so a bad date fails before any timeline is built.
"""

import logging
from datetime import date, datetime
from typing import Any, Iterable, List, Tuple, Union

from pydantic import ValidationError

from ..errors import ParseError
from ..models import MatchRecord, TrainingSessionRecord
from .formatters import parse_iso_datetime
from .types import MatchEvent, TrainingEvent

logger = logging.getLogger(__name__)


def parse_window(start_date: str, end_date: str) -> Tuple[date, date]:
    """
    Parse and check an inclusive date window.

    Raises:
        ParseError: If either bound is unparseable or start_date > end_date
    """
    start = parse_iso_datetime(start_date, field="start_date").date()
    end = parse_iso_datetime(end_date, field="end_date").date()
    if start > end:
        raise ParseError(
            f"start_date {start.isoformat()} is after end_date {end.isoformat()}",
            field="start_date",
            value=start_date
        )
    return start, end


def _to_match_record(raw: Union[MatchRecord, dict]) -> MatchRecord:
    if isinstance(raw, MatchRecord):
        return raw
    try:
        return MatchRecord(**raw)
    except (ValidationError, TypeError, ValueError) as e:
        raise ParseError(f"Invalid match record: {e}", field="match", value=raw) from e


def _to_training_record(raw: Union[TrainingSessionRecord, dict]) -> TrainingSessionRecord:
    if isinstance(raw, TrainingSessionRecord):
        return raw
    try:
        return TrainingSessionRecord.from_dict(raw)
    except (ValidationError, TypeError, ValueError) as e:
        raise ParseError(f"Invalid training session record: {e}", field="training_session", value=raw) from e


def _in_window(dt: datetime, window: Tuple[date, date]) -> bool:
    return window[0] <= dt.date() <= window[1]


def collect_events(
    matches: Iterable[Any],
    training_sessions: Iterable[Any],
    start_date: str,
    end_date: str
) -> Tuple[List[MatchEvent], List[TrainingEvent]]:
    """
    Build match and training events for one player and date window.

    Args:
        matches: MatchRecord objects or plain dicts
        training_sessions: TrainingSessionRecord objects or plain dicts
        start_date: Inclusive window start (ISO date)
        end_date: Inclusive window end (ISO date)

    Returns:
        (match_events, training_events), each in input order

    Raises:
        ParseError: On an invalid window, record or date
    """
    window = parse_window(start_date, end_date)

    match_events = []
    for raw in matches:
        record = _to_match_record(raw)
        dt = parse_iso_datetime(record.date, field=f"matches[{record.id}].date")
        if not _in_window(dt, window):
            logger.warning(f"Dropping match {record.id} dated {record.date} outside {start_date}..{end_date}")
            continue
        match_events.append(MatchEvent(
            date=dt,
            home_team=record.home_team,
            away_team=record.away_team,
            source_id=record.id
        ))

    training_events = []
    for raw in training_sessions:
        record = _to_training_record(raw)
        dt = parse_iso_datetime(record.date, field=f"training_sessions[{record.id}].date")
        if not record.attended_by_target_player:
            logger.debug(f"Skipping training session {record.id}: not attended")
            continue
        if not _in_window(dt, window):
            logger.warning(f"Dropping training session {record.id} dated {record.date} outside {start_date}..{end_date}")
            continue
        training_events.append(TrainingEvent(
            date=dt,
            session_type=record.type,
            intensity=record.intensity,
            duration=record.duration,
            source_id=record.id
        ))

    return match_events, training_events
