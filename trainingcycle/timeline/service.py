"""
Main entry point for building a player's training-cycle timeline.
"""

import logging
from typing import Any, Dict, List

from ..models import TimelineQuery
from .adapters import to_timeline_entries
from .builder import build_timeline
from .collector import collect_events, parse_window
from .sorter import merge_events, sort_matches
from .types import TimelineEntry

logger = logging.getLogger(__name__)


def timeline_from_payload(payload: Dict[str, Any], start_date: str, end_date: str) -> List[TimelineEntry]:
    """
    Build a timeline from an already-fetched payload.

    Args:
        payload: {"matches": [...], "training_sessions": [...]}
        start_date: Inclusive window start (ISO date)
        end_date: Inclusive window end (ISO date)

    Returns:
        Date-ascending list of TimelineEntry

    Raises:
        ParseError: On an invalid window, record or date
    """
    matches, trainings = collect_events(
        payload.get('matches') or [],
        payload.get('training_sessions') or [],
        start_date,
        end_date
    )
    events = merge_events(matches, trainings)
    days = build_timeline(events, sort_matches(matches))
    entries = to_timeline_entries(days)

    logger.info(
        f"Built timeline {start_date}..{end_date}: {len(matches)} matches, "
        f"{len(trainings)} attended sessions, {len(entries)} entries"
    )
    return entries


def build_player_timeline(source, query: TimelineQuery) -> List[TimelineEntry]:
    """
    Fetch a player's matches and sessions, then build the timeline.

    Args:
        source: TrainingDataSource to fetch from
        query: Player and window

    Returns:
        Date-ascending list of TimelineEntry

    Raises:
        DataUnavailable: If the source cannot deliver data (nothing is built)
        ParseError: On an invalid window, record or date
    """
    parse_window(query.start_date, query.end_date)
    payload = source.fetch_training_cycle(query)
    return timeline_from_payload(payload, query.start_date, query.end_date)
