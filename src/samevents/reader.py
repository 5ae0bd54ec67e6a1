import os
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from .cigar import measure_cigar
from .constants import DEFAULT_CACHE_CAPACITY, MATCH
from .errors import MalformedCigar, ReferenceNotFound, SequenceOutOfBounds
from .events import CompactEvent, Event, iter_events
from .logging_config import logger
from .paging import iter_compact
from .ref import ReferenceStore


@dataclass
class AlignmentRecord:
    qname: str
    chrom: str
    start: int
    cigar: str
    seq: str
    mapq: int
    reverse: bool
    primary: bool
    supplementary: bool
    secondary: bool


def _open_mode(bam_path: str) -> str:
    lower = bam_path.lower()
    if lower.endswith(".cram"):
        return "rc"
    if lower.endswith(".sam"):
        return "r"
    return "rb"


def fetch_alignments(
    bam_path: str,
    chrom: Optional[str] = None,
    start: Optional[int] = None,
    end: Optional[int] = None,
    mapq_min: int = 0,
    show_supp: bool = True,
    show_secondary: bool = False,
    fa_path: Optional[str] = None,
) -> Iterator[AlignmentRecord]:
    """Yield mapped records of a SAM/BAM/CRAM file that carry a CIGAR and SEQ.

    Without ``chrom`` the whole file is read in order and no index is needed.
    """
    import pysam

    open_mode = _open_mode(bam_path)
    open_kwargs = {}
    # For CRAM files, provide reference genome if available
    if open_mode == "rc" and fa_path and os.path.exists(fa_path):
        open_kwargs["reference_filename"] = fa_path

    with pysam.AlignmentFile(bam_path, open_mode, **open_kwargs) as af:
        it = af.fetch(chrom, start, end) if chrom else af.fetch(until_eof=True)
        for r in it:
            if r.is_unmapped or not r.cigarstring or not r.query_sequence:
                continue
            if r.mapping_quality < mapq_min:
                continue
            supp = bool(r.flag & 0x800)
            sec = bool(r.flag & 0x100)
            if not show_supp and supp:
                continue
            if not show_secondary and sec:
                continue
            yield AlignmentRecord(
                qname=r.query_name,
                chrom=r.reference_name,
                start=r.reference_start,
                cigar=r.cigarstring,
                seq=r.query_sequence,
                mapq=r.mapping_quality,
                reverse=r.is_reverse,
                primary=not supp and not sec,
                supplementary=supp,
                secondary=sec,
            )


def decode_record(
    store: ReferenceStore, rec: AlignmentRecord, mode: str = "compact", matches: bool = False
) -> List[Union[Event, CompactEvent]]:
    ref_len, _ = measure_cigar(rec.cigar)
    ref = store.window(store.find(rec.chrom), rec.start, ref_len)
    events = iter_events(rec.cigar, rec.seq, ref)
    if mode == "compact":
        return list(iter_compact(events, rec.start))
    return [e for e in events if matches or e.type != MATCH]


def decode_alignments(
    bam_path: str,
    fa_path: str,
    chrom: Optional[str] = None,
    start: Optional[int] = None,
    end: Optional[int] = None,
    mode: str = "compact",
    matches: bool = False,
    mapq_min: int = 0,
    show_supp: bool = True,
    show_secondary: bool = False,
    strict: bool = False,
    cache_capacity: int = DEFAULT_CACHE_CAPACITY,
) -> Iterator[Tuple[AlignmentRecord, List[Union[Event, CompactEvent]]]]:
    """Expand every alignment in a file (or region) against ``fa_path``.

    Records that cannot be decoded are skipped with a warning unless
    ``strict`` is set, in which case the error propagates.
    """
    skipped = 0
    with ReferenceStore(fa_path, cache_capacity=cache_capacity) as store:
        for rec in fetch_alignments(
            bam_path,
            chrom,
            start,
            end,
            mapq_min=mapq_min,
            show_supp=show_supp,
            show_secondary=show_secondary,
            fa_path=fa_path,
        ):
            try:
                events = decode_record(store, rec, mode=mode, matches=matches)
            except (MalformedCigar, SequenceOutOfBounds, ReferenceNotFound) as e:
                if strict:
                    raise
                skipped += 1
                logger.warning(f"skipping {rec.qname} at {rec.chrom}:{rec.start}: {e}")
                continue
            yield rec, events
    if skipped:
        logger.info(f"{skipped} record(s) could not be decoded")
