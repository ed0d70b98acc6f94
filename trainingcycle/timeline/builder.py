"""
Training-cycle builder

Labels each event with its distance in days to the next match (J-x):

1. Walk the date-sorted events, keeping a second index into the date-sorted
   matches to find each match's successor (first match strictly later).
2. A match is emitted as J-0. If it has a successor, the walk enters the cycle
   anchored on it; otherwise the walk leaves any cycle.
3. Inside a cycle, each non-match event is emitted with
   days_until_next - days_from_match, kept only when positive.
4. Outside a cycle, non-match events are not emitted. With no matches at all,
   every event is emitted unlabeled.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from ..errors import ParseError
from .types import CycleDay, Event, MatchEvent

ONE_DAY = timedelta(days=1)


def days_between(start: datetime, end: datetime) -> int:
    """
    Whole days from start to end, floored.

    Args:
        start: Earlier datetime
        end: Later datetime

    Returns:
        floor((end - start) / 1 day)

    Raises:
        ParseError: If either value is not a datetime
    """
    if not isinstance(start, datetime) or not isinstance(end, datetime):
        raise ParseError(f"Cannot count days between {start!r} and {end!r}", field="date")
    return (end - start) // ONE_DAY


def build_timeline(events: Sequence[Event], matches: Optional[Sequence[MatchEvent]] = None) -> List[CycleDay]:
    """
    Build the labelled timeline from date-sorted events.

    Args:
        events: Events sorted by date (see merge_events)
        matches: Matches sorted by date; derived from events when omitted

    Returns:
        New list of CycleDay, date-ascending
    """
    if matches is None:
        matches = [e for e in events if isinstance(e, MatchEvent)]

    if not matches:
        return [CycleDay(event=e) for e in events]

    timeline = []
    next_index = 0
    anchor = None  # match the current cycle is counted from; None outside a cycle
    days_until_next = 0

    for event in events:
        if isinstance(event, MatchEvent):
            while next_index < len(matches) and matches[next_index].date <= event.date:
                next_index += 1

            timeline.append(CycleDay(event=event, days_before_match=0))

            if next_index < len(matches):
                anchor = event
                days_until_next = days_between(event.date, matches[next_index].date)
            else:
                # Last match in the window: later events are not emitted
                anchor = None
            continue

        if anchor is None:
            continue

        days_before_next = days_until_next - days_between(anchor.date, event.date)
        timeline.append(CycleDay(
            event=event,
            days_before_match=days_before_next if days_before_next > 0 else None
        ))

    return timeline
