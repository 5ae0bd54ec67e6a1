from typing import Iterator, List, Tuple

from .constants import ADVANCE
from .errors import MalformedCigar


def iter_cigar(cigar: str) -> Iterator[Tuple[str, int]]:
    """Yield ``(op, length)`` pairs from a CIGAR string, left to right.

    The scan is lazy; calling it again restarts from the beginning. An empty
    string yields nothing. Zero-length runs are rejected, no aligner emits them.
    """
    num = []
    for ch in cigar:
        if "0" <= ch <= "9":
            num.append(ch)
            continue
        if ch not in ADVANCE:
            raise MalformedCigar(cigar, f"unexpected character {ch!r}")
        if not num:
            raise MalformedCigar(cigar, f"operation {ch!r} has no run length")
        length = int("".join(num))
        if length == 0:
            raise MalformedCigar(cigar, f"zero-length {ch!r} run")
        num = []
        yield ch, length
    if num:
        raise MalformedCigar(cigar, "trailing run length with no operation")


def parse_cigar_string(cigar: str) -> List[Tuple[str, int]]:
    return list(iter_cigar(cigar))


def consumes_reference(op: str) -> bool:
    return ADVANCE[op][0] == 1


def consumes_query(op: str) -> bool:
    return ADVANCE[op][1] == 1


def measure_cigar(cigar: str) -> Tuple[int, int]:
    """Return ``(ref_length, seq_length)`` spanned by ``cigar``."""
    ref_len = 0
    seq_len = 0
    for op, length in iter_cigar(cigar):
        ref_step, seq_step = ADVANCE[op]
        ref_len += ref_step * length
        seq_len += seq_step * length
    return ref_len, seq_len


validate_cigar = measure_cigar
