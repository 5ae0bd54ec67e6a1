"""Entry points for decoding one alignment into edit events.

Coordinate conventions differ between the two modes and both are relied on
downstream:

* ``expand_raw`` reports ``Event.ref_pos`` relative to the alignment start
  (the first reference base covered by the CIGAR is 0).
* ``expand_compact`` reports ``CompactEvent.ref_pos`` as an absolute contig
  coordinate, i.e. shifted by ``position``. ``seq_pos`` is always a query
  offset in both modes.

``expand_raw`` leaves match runs out by default, so a perfect alignment pages
as empty. Pass ``matches=True`` to get every event, matches included.

``reference`` is the reference sequence starting at ``position``; use
``ReferenceStore.window`` to cut it from a contig. A call either returns a
complete ``Page`` or raises, it never hands back a partial page.
"""
from typing import Tuple

from .cigar import measure_cigar
from .constants import MATCH
from .events import Bases, iter_events
from .paging import Page, page_compact, page_raw


def measure(cigar: str) -> Tuple[int, int]:
    return measure_cigar(cigar)


def expand_raw(
    cigar: str,
    query: Bases,
    position: int,
    reference: Bases,
    capacity: int,
    offset: int = 0,
    matches: bool = False,
) -> Page:
    """Page through the uncompacted events of an alignment.

    Match runs are left out unless ``matches`` is set, so a perfect alignment
    decodes to an empty page. ``position`` does not affect the coordinates in
    this mode.
    """
    events = iter_events(cigar, query, reference)
    if not matches:
        events = (e for e in events if e.type != MATCH)
    return page_raw(events, capacity, offset)


def expand_compact(
    cigar: str,
    query: Bases,
    position: int,
    reference: Bases,
    capacity: int,
    offset: int = 0,
) -> Page:
    return page_compact(iter_events(cigar, query, reference), position, capacity, offset)
