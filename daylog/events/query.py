"""
Filtering and selection of Events.

Listing narrows the log down: every option given has to match (AND). Deleting casts
a wider net: an Event is selected if any of the options given match it (OR).
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Iterator, Optional, Sequence

from daylog.events.event import Event

logger = logging.getLogger(__name__)


@dataclass
class Criteria:
    """
    Filters for listing Events. Any field left as None puts no constraint on the
    results.
    """

    specific_date: Optional[date] = None
    before_date: Optional[date] = None
    after_date: Optional[date] = None
    categories: Optional[set[str]] = None

    # Keep the events whose category is *not* in categories
    exclude: bool = False

    def predicates(self) -> list[Callable[[Event], bool]]:
        preds: list[Callable[[Event], bool]] = []

        if self.specific_date is not None:
            specific_date = self.specific_date
            preds.append(lambda e: e.date == specific_date)

        # Both bounds are exclusive
        if self.before_date is not None:
            before_date = self.before_date
            preds.append(lambda e: e.date < before_date)
        if self.after_date is not None:
            after_date = self.after_date
            preds.append(lambda e: e.date > after_date)

        if self.categories is not None:
            categories = self.categories
            if self.exclude:
                preds.append(lambda e: e.category not in categories)
            else:
                preds.append(lambda e: e.category in categories)

        return preds


def filter_events(events: Iterable[Event], criteria: Criteria) -> Iterator[Event]:
    """
    Lazily yield the events matching all of the criteria, in their original order
    """
    preds = criteria.predicates()
    for event in events:
        if all(pred(event) for pred in preds):
            yield event


@dataclass
class DeleteCriteria:
    """
    What to select for deletion. An event matching any one of date, description (a
    substring) or category is selected. If all is set, everything is selected.
    """

    date: Optional[date] = None
    description: Optional[str] = None
    category: Optional[str] = None
    all: bool = False

    def matches(self, event: Event) -> bool:
        if self.all:
            return True
        if self.date is not None and event.date == self.date:
            return True
        if self.description and self.description in event.description:
            return True
        if self.category and event.category == self.category:
            return True
        return False


def select_for_deletion(
    events: Sequence[Event], criteria: DeleteCriteria
) -> list[int]:
    """
    Returns the positions of the selected events, in order. Positions are used rather
    than the events themselves so that identical events are each removed once.
    """
    positions = [i for i, event in enumerate(events) if criteria.matches(event)]
    logger.debug(f"Selected {len(positions)} of {len(events)} events for deletion")
    return positions


def remove_positions(events: Sequence[Event], positions: Iterable[int]) -> list[Event]:
    """
    Returns the events which aren't at any of the given positions
    """
    to_remove = set(positions)
    return [event for i, event in enumerate(events) if i not in to_remove]
