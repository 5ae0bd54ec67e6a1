from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from .cigar import measure_cigar, parse_cigar_string
from .constants import ADVANCE, ALIGNED_OPS, DELETION, INSERTION, MATCH, MISMATCH
from .errors import SequenceOutOfBounds


Bases = Union[str, bytes]


@dataclass
class Event:
    """One run of a single alignment relationship.

    ``ref_pos`` and ``seq_pos`` are offsets from the start of the alignment
    window, not from the start of the contig.
    """
    type: str
    length: int
    ref_pos: int
    seq_pos: int


@dataclass
class CompactEvent:
    ref_pos: int  # absolute, shifted by the alignment start
    seq_pos: int
    ref_len: int
    seq_len: int

    @property
    def ref_end(self) -> int:
        return self.ref_pos + self.ref_len

    @property
    def seq_end(self) -> int:
        return self.seq_pos + self.seq_len

    @classmethod
    def from_event(cls, event: Event, position: int) -> "CompactEvent":
        ref_len = 0 if event.type == INSERTION else event.length
        seq_len = 0 if event.type == DELETION else event.length
        return cls(event.ref_pos + position, event.seq_pos, ref_len, seq_len)


def _as_text(bases: Bases) -> str:
    if isinstance(bases, (bytes, bytearray, memoryview)):
        # bytes.upper leaves non-ASCII alone, so one byte stays one character
        return bytes(bases).upper().decode("latin-1")
    return bases.upper()


def _aligned_runs(ref: str, seq: str, fi: int, ri: int, l: int) -> Iterator[Tuple[str, int, int]]:
    k = 0
    while k < l:
        same = ref[fi + k] == seq[ri + k]
        m = 1
        while k + m < l and (ref[fi + k + m] == seq[ri + k + m]) == same:
            m += 1
        yield (MATCH if same else MISMATCH), m, k
        k += m


def iter_events(cigar: str, query: Bases, reference: Bases) -> Iterator[Event]:
    """Walk ``cigar`` over ``reference`` and ``query`` and yield edit events.

    ``reference`` starts at the alignment's first reference base. Aligned
    operations (M, = and X) are split into maximal match/mismatch runs by
    comparing bases, so ``=`` and ``X`` are not trusted blindly. Clips,
    skips and padding only move the counters.

    Malformed CIGARs and spans that run off either sequence are reported here,
    before the returned iterator produces anything.
    """
    ops = parse_cigar_string(cigar)
    ref_len, seq_len = measure_cigar(cigar)
    if ref_len > len(reference):
        raise SequenceOutOfBounds("reference", ref_len, len(reference))
    if seq_len > len(query):
        raise SequenceOutOfBounds("query", seq_len, len(query))
    return _walk(ops, _as_text(query), _as_text(reference))


def _walk(ops: List[Tuple[str, int]], seq: str, ref: str) -> Iterator[Event]:
    fi = 0
    ri = 0
    for op, l in ops:
        if op in ALIGNED_OPS:
            for t, m, k in _aligned_runs(ref, seq, fi, ri, l):
                yield Event(t, m, fi + k, ri + k)
        elif op == "I":
            yield Event(INSERTION, l, fi, ri)
        elif op == "D":
            yield Event(DELETION, l, fi, ri)
        ref_step, seq_step = ADVANCE[op]
        fi += ref_step * l
        ri += seq_step * l


def expand_alignment(cigar: str, query: Bases, reference: Bases) -> List[Event]:
    return list(iter_events(cigar, query, reference))
