import argparse
import dataclasses
import json
import sys

from .constants import DEFAULT_CAPACITY, MODES
from .errors import SamEventsError
from .logging_config import setup_logging


def parse_region(region: str):
    """``chr``, ``chr:pos`` or ``chr:start-end`` -> (chrom, start, end)."""
    if ":" not in region:
        return region, None, None
    chrom, coords = region.rsplit(":", 1)
    coords = coords.replace(",", "")
    if "-" in coords:
        s, e = coords.split("-")
        return chrom, int(s), int(e)
    pos = int(coords)
    return chrom, pos, pos + 1


def _page_to_dict(page):
    return {
        "written": page.written,
        "remaining": page.remaining,
        "events": [dataclasses.asdict(e) for e in page.events],
    }


def cmd_measure(args):
    from .expand import measure

    ref_len, seq_len = measure(args.cigar)
    print(json.dumps({"ref_length": ref_len, "seq_length": seq_len}))


def cmd_expand(args):
    from .cigar import measure_cigar
    from .expand import expand_compact, expand_raw

    if args.ref is not None:
        reference = args.ref
    elif args.fa and args.chrom:
        from .ref import get_ref_subseq

        ref_len, _ = measure_cigar(args.cigar)
        reference = get_ref_subseq(args.fa, args.chrom, args.pos, args.pos + ref_len)
    else:
        raise SystemExit("Error: expand needs --ref, or --fa together with --chrom")

    if args.mode == "raw":
        page = expand_raw(args.cigar, args.seq, args.pos, reference, args.capacity, args.offset, matches=args.matches)
    else:
        page = expand_compact(args.cigar, args.seq, args.pos, reference, args.capacity, args.offset)
    print(json.dumps(_page_to_dict(page), indent=2))


def cmd_bam(args):
    from .reader import decode_alignments

    chrom, start, end = parse_region(args.region) if args.region else (None, None, None)
    for rec, events in decode_alignments(
        args.bam,
        args.fa,
        chrom,
        start,
        end,
        mode=args.mode,
        matches=args.matches,
        mapq_min=args.mapq,
        show_supp=args.show_supp,
        show_secondary=args.show_secondary,
        strict=args.strict,
    ):
        out = {
            "qname": rec.qname,
            "chrom": rec.chrom,
            "start": rec.start,
            "cigar": rec.cigar,
            "events": [dataclasses.asdict(e) for e in events],
        }
        print(json.dumps(out))


def main(argv=None):
    p = argparse.ArgumentParser(prog="sam-events", description="Expand CIGAR strings into edit events")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level, [WARNING]")
    p.add_argument("--log-file", help="Also write a debug log to this file")
    sub = p.add_subparsers(dest="cmd")

    m = sub.add_parser("measure", help="Report reference and query lengths spanned by a CIGAR")
    m.add_argument("--cigar", required=True, help="CIGAR string, e.g. '100M1D50M'")
    m.set_defaults(func=cmd_measure)

    e = sub.add_parser("expand", help="Expand one alignment into events")
    e.add_argument("--cigar", required=True, help="CIGAR string")
    e.add_argument("--seq", required=True, help="Query bases")
    e.add_argument("--pos", type=int, default=0, help="0-based alignment start on the reference, [0]")
    e.add_argument("--ref", help="Reference bases starting at --pos")
    e.add_argument("--fa", help="Indexed reference FASTA (used with --chrom instead of --ref)")
    e.add_argument("--chrom", help="Reference sequence name in --fa")
    e.add_argument("--mode", choices=MODES, default="raw", help="Output mode, [raw]")
    e.add_argument("--capacity", type=int, default=DEFAULT_CAPACITY, help=f"Maximum events to return, [{DEFAULT_CAPACITY}]")
    e.add_argument("--offset", type=int, default=0, help="Events (raw) or slots (compact) to skip, [0]")
    e.add_argument("--matches", action="store_true", help="Include match runs in raw mode")
    e.set_defaults(func=cmd_expand)

    b = sub.add_parser("bam", help="Expand every alignment in a SAM/BAM/CRAM file")
    b.add_argument("--bam", required=True, help="SAM/BAM/CRAM file path")
    b.add_argument("--fa", required=True, help="Indexed reference FASTA")
    b.add_argument("--region", help="Region, format: chr, chr:pos or chr:start-end (needs an index)")
    b.add_argument("--mode", choices=MODES, default="compact", help="Output mode, [compact]")
    b.add_argument("--matches", action="store_true", help="Include match runs in raw mode")
    b.add_argument("--mapq", type=int, default=0, help="Minimum MAPQ value, [0]")
    b.add_argument("--show-supp", action="store_true", help="Include supplementary alignments")
    b.add_argument("--show-secondary", action="store_true", help="Include secondary alignments")
    b.add_argument("--strict", action="store_true", help="Stop at the first record that cannot be decoded")
    b.set_defaults(func=cmd_bam)

    args = p.parse_args(argv)

    if args.cmd is None:
        p.print_help()
        return

    setup_logging(args.log_level, args.log_file)
    try:
        args.func(args)
    except (SamEventsError, OSError, ValueError) as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
