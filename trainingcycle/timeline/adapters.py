"""
Adapters from builder output to the renderer data contract.

This module attaches labels and shapes the plain records a renderer (the JSON
API, the CLI) consumes. No day arithmetic happens here.
"""

from typing import Any, Dict, Iterable, List

from .types import (
    CycleDay,
    MatchEvent,
    MatchEntry,
    MatchInfo,
    TimelineEntry,
    TrainingEntry,
    TrainingInfo
)
from .formatters import format_date_iso, format_match_label, format_training_label


def to_timeline_entry(day: CycleDay) -> TimelineEntry:
    """
    Convert a CycleDay to a renderer entry.

    Args:
        day: CycleDay from build_timeline

    Returns:
        MatchEntry or TrainingEntry matching the event's kind
    """
    event = day.event
    if isinstance(event, MatchEvent):
        return MatchEntry(
            date=event.date,
            label=format_match_label(event.home_team, event.away_team),
            daysBeforeMatch=day.days_before_match if day.days_before_match is not None else 0,
            matchInfo=MatchInfo(homeTeam=event.home_team, awayTeam=event.away_team)
        )

    return TrainingEntry(
        date=event.date,
        label=format_training_label(event.session_type),
        daysBeforeMatch=day.days_before_match,
        trainingInfo=TrainingInfo(
            type=event.session_type,
            intensity=event.intensity,
            duration=event.duration
        )
    )


def to_timeline_entries(days: Iterable[CycleDay]) -> List[TimelineEntry]:
    return [to_timeline_entry(day) for day in days]


def to_record(entry: TimelineEntry) -> Dict[str, Any]:
    """
    Shape an entry as a plain dict.

    daysBeforeMatch is left out when the entry has no label; only the info
    block matching the entry's kind is present.
    """
    record = {
        'date': format_date_iso(entry.date),
        'kind': entry.kind,
        'label': entry.label,
    }
    if entry.daysBeforeMatch is not None:
        record['daysBeforeMatch'] = entry.daysBeforeMatch
    if isinstance(entry, MatchEntry):
        record['matchInfo'] = entry.matchInfo.model_dump()
    else:
        record['trainingInfo'] = entry.trainingInfo.model_dump()
    return record


def to_records(entries: Iterable[TimelineEntry]) -> List[Dict[str, Any]]:
    return [to_record(entry) for entry in entries]
