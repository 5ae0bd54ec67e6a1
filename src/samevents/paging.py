"""Lazy adapters that turn an event stream into bounded pages.

A page is what a fixed-size caller gets from one call: at most ``capacity``
items after skipping ``offset`` of them, plus how many are left so the caller
can come back with a larger offset.
"""
import itertools
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Tuple, Union

from .constants import MATCH
from .events import CompactEvent, Event


@dataclass
class Page:
    events: List[Union[Event, CompactEvent]] = field(default_factory=list)
    remaining: int = 0

    @property
    def written(self) -> int:
        return len(self.events)


def take(iterable: Iterable, offset: int, capacity: int) -> Iterator:
    """Skip ``offset`` items, then yield up to ``capacity``. Negatives count as 0."""
    offset = max(0, offset)
    capacity = max(0, capacity)
    return itertools.islice(iterable, offset, offset + capacity)


def _merge(events: Iterable[Event], position: int) -> Iterator[Tuple[CompactEvent, int]]:
    # yields each compacted slot with the number of source events folded into it
    slot = None
    n = 0
    for evt in events:
        if evt.type == MATCH:
            continue
        cur = CompactEvent.from_event(evt, position)
        if slot is not None and slot.ref_end == cur.ref_pos and slot.seq_end == cur.seq_pos:
            slot.ref_len += cur.ref_len
            slot.seq_len += cur.seq_len
            n += 1
            continue
        if slot is not None:
            yield slot, n
        slot = cur
        n = 1
    if slot is not None:
        yield slot, n


def iter_compact(events: Iterable[Event], position: int) -> Iterator[CompactEvent]:
    """Drop matches and fold edits that touch end-to-start in both coordinates.

    Two edits merge when the first one's ``(ref_end, seq_end)`` equals the
    second one's ``(ref_pos, seq_pos)``, e.g. an insertion directly followed by
    a deletion becomes one substitution-like run.
    """
    for slot, _ in _merge(events, position):
        yield slot


def page_raw(events: Iterable[Event], capacity: int, offset: int = 0) -> Page:
    events = list(events)
    out = list(take(events, offset, capacity))
    remaining = max(0, len(events) - max(0, offset) - max(0, capacity))
    return Page(out, remaining)


def page_compact(events: Iterable[Event], position: int, capacity: int, offset: int = 0) -> Page:
    """Page over compacted slots.

    ``offset`` counts slots, not source events. ``remaining`` is the number of
    non-match source events that were neither skipped nor written.
    """
    retained = [e for e in events if e.type != MATCH]
    offset = max(0, offset)
    stop = offset + max(0, capacity)
    out: List[CompactEvent] = []
    consumed = 0
    for i, (slot, n) in enumerate(_merge(retained, position)):
        if i >= stop:
            break
        consumed += n
        if i >= offset:
            out.append(slot)
    return Page(out, len(retained) - consumed)
