from collections import OrderedDict
from typing import List, Tuple

from pyfaidx import Fasta, FastaIndexingError, FetchError

from .constants import DEFAULT_CACHE_CAPACITY
from .errors import ReferenceLoadFailure, ReferenceNotFound
from .logging_config import logger


class ReferenceStore:
    """Indexed FASTA file with sequences addressed by integer handle.

    ``find`` turns a sequence name into a handle, ``sequence_data`` returns
    the whole contig and ``window`` a slice of it. Up to ``cache_capacity``
    whole contigs are kept in memory, least recently used first out; callers
    must not rely on any sequence staying cached.
    """

    def __init__(self, fa_path: str, cache_capacity: int = DEFAULT_CACHE_CAPACITY):
        try:
            self._fa = Fasta(fa_path, as_raw=True, sequence_always_upper=True)
        except (OSError, ValueError, FastaIndexingError) as e:
            raise ReferenceLoadFailure(f"cannot load FASTA '{fa_path}': {e}") from e
        self.path = fa_path
        self.names: List[str] = list(self._fa.keys())
        self._index = {name: i for i, name in enumerate(self.names)}
        self.cache_capacity = max(0, cache_capacity)
        self._cache: "OrderedDict[int, str]" = OrderedDict()
        logger.debug(f"loaded {fa_path} with {len(self.names)} sequences")

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self._cache.clear()
        self._fa.close()

    def find(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise ReferenceNotFound(f"no sequence named '{name}' in {self.path}") from None

    def _name(self, handle: int) -> str:
        if not 0 <= handle < len(self.names):
            raise ReferenceNotFound(f"no sequence with handle {handle} in {self.path}")
        return self.names[handle]

    def length(self, handle: int) -> int:
        return len(self._fa[self._name(handle)])

    def sequence_data(self, handle: int) -> Tuple[str, int]:
        """Return ``(bases, length)`` of a whole sequence."""
        if handle in self._cache:
            self._cache.move_to_end(handle)
            bases = self._cache[handle]
            return bases, len(bases)
        name = self._name(handle)
        try:
            bases = str(self._fa[name][:])
        except (OSError, ValueError, FastaIndexingError, FetchError) as e:
            raise ReferenceLoadFailure(f"cannot read '{name}' from {self.path}: {e}") from e
        if self.cache_capacity:
            self._cache[handle] = bases
            while len(self._cache) > self.cache_capacity:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug(f"evicted {self.names[evicted]} from reference cache")
        return bases, len(bases)

    def window(self, handle: int, start: int, length: int) -> str:
        """Bases ``[start, start + length)``, cut short at the end of the sequence."""
        start = max(0, start)
        end = start + max(0, length)
        if handle in self._cache:
            return self._cache[handle][start:end]
        name = self._name(handle)
        end = min(end, len(self._fa[name]))
        if start >= end:
            return ""
        try:
            return str(self._fa[name][start:end])
        except (OSError, ValueError, FastaIndexingError, FetchError) as e:
            raise ReferenceLoadFailure(f"cannot read '{name}' from {self.path}: {e}") from e


def resolve_reference(store: ReferenceStore, name: str) -> str:
    bases, _ = store.sequence_data(store.find(name))
    return bases


def get_ref_subseq(fa_path: str, chrom: str, start: int, end: int) -> str:
    with ReferenceStore(fa_path, cache_capacity=0) as store:
        return store.window(store.find(chrom), start, end - start)
