"""Chronological merge of match and training events."""

from typing import Iterable, List

from .types import Event, MatchEvent, TrainingEvent


def _event_date(event: Event):
    return event.date


def sort_matches(matches: Iterable[MatchEvent]) -> List[MatchEvent]:
    """Return matches ordered by date (stable)"""
    return sorted(matches, key=_event_date)


def merge_events(matches: Iterable[MatchEvent], trainings: Iterable[TrainingEvent]) -> List[Event]:
    """
    Merge matches and trainings into one date-ascending list.

    The sort is stable: events on the same date keep source order, matches
    before trainings. There is no other precedence between the two kinds.
    """
    return sorted([*matches, *trainings], key=_event_date)
