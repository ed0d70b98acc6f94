"""
TrainingCycle timeline engine

Builds a player's training-cycle timeline:
1. collect_events - fetched records to match/training events (attended sessions only)
2. merge_events - one date-ascending sequence
3. build_timeline - J-x labels relative to each match's successor
4. to_timeline_entries / to_records - renderer data contract
"""

from .types import (
    MatchEvent,
    TrainingEvent,
    Event,
    CycleDay,
    MatchEntry,
    TrainingEntry,
    TimelineEntry
)
from .collector import collect_events, parse_window
from .sorter import merge_events, sort_matches
from .builder import build_timeline
from .adapters import to_timeline_entry, to_timeline_entries, to_record, to_records
from .service import build_player_timeline, timeline_from_payload

__all__ = [
    'MatchEvent',
    'TrainingEvent',
    'Event',
    'CycleDay',
    'MatchEntry',
    'TrainingEntry',
    'TimelineEntry',
    'collect_events',
    'parse_window',
    'merge_events',
    'sort_matches',
    'build_timeline',
    'to_timeline_entry',
    'to_timeline_entries',
    'to_record',
    'to_records',
    'build_player_timeline',
    'timeline_from_payload',
]
