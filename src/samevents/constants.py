from typing import Dict, Tuple


# (reference advance, query advance) per operation
ADVANCE: Dict[str, Tuple[int, int]] = {
    "M": (1, 1),
    "I": (0, 1),
    "D": (1, 0),
    "N": (1, 0),  # skipped region, e.g. intron
    "S": (0, 1),
    "H": (0, 0),
    "P": (0, 0),
    "=": (1, 1),
    "X": (1, 1),
}

# operations whose bases are compared against the reference
ALIGNED_OPS = frozenset("M=X")

MATCH = "match"
MISMATCH = "mismatch"
INSERTION = "insertion"
DELETION = "deletion"

MODES = ("raw", "compact")

DEFAULT_CAPACITY = 1024
DEFAULT_CACHE_CAPACITY = 8
