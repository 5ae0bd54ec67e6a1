import os
import shutil
import tempfile
import unittest

import pysam

from samevents.errors import SequenceOutOfBounds
from samevents.events import CompactEvent, Event
from samevents.reader import decode_alignments, fetch_alignments


REF = "ACGTACGTACGTACGTACGT"

# (name, start, cigar, seq)
READS = [
    ("r1", 2, "4M", "GTAC"),
    ("r2", 4, "2M1I2M1D2M", "ACGGTCG"),
    ("r3", 10, "3M", "TTT"),
    ("r4", 18, "5M", "ACGTA"),  # runs off the end of chr1
]


def write_bam(path):
    header = {"HD": {"VN": "1.6", "SO": "coordinate"}, "SQ": [{"SN": "chr1", "LN": len(REF)}]}
    with pysam.AlignmentFile(path, "wb", header=header) as out:
        for name, start, cigar, seq in READS:
            a = pysam.AlignedSegment(out.header)
            a.query_name = name
            a.query_sequence = seq
            a.flag = 0
            a.reference_id = 0
            a.reference_start = start
            a.mapping_quality = 60
            a.cigarstring = cigar
            a.query_qualities = pysam.qualitystring_to_array("I" * len(seq))
            out.write(a)
    pysam.index(path)


class TestReader(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.fa = os.path.join(self.tmpdir, "ref.fa")
        with open(self.fa, "w") as f:
            f.write(">chr1\n" + REF + "\n")
        self.bam = os.path.join(self.tmpdir, "reads.bam")
        write_bam(self.bam)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_fetch_alignments(self):
        recs = list(fetch_alignments(self.bam))
        self.assertEqual([r.qname for r in recs], ["r1", "r2", "r3", "r4"])
        self.assertEqual((recs[1].chrom, recs[1].start, recs[1].cigar), ("chr1", 4, "2M1I2M1D2M"))
        self.assertTrue(recs[0].primary)

    def test_fetch_region(self):
        recs = list(fetch_alignments(self.bam, "chr1", 9, 20))
        self.assertEqual([r.qname for r in recs], ["r2", "r3", "r4"])

    def test_mapq_filter(self):
        self.assertEqual(list(fetch_alignments(self.bam, mapq_min=61)), [])

    def test_decode_compact(self):
        out = {rec.qname: events for rec, events in decode_alignments(self.bam, self.fa)}
        self.assertEqual(sorted(out), ["r1", "r2", "r3"])
        self.assertEqual(out["r1"], [])
        self.assertEqual(out["r2"], [CompactEvent(6, 2, 0, 1), CompactEvent(8, 5, 1, 0)])
        self.assertEqual(out["r3"], [CompactEvent(10, 0, 1, 1), CompactEvent(12, 2, 1, 1)])

    def test_decode_raw(self):
        out = {rec.qname: events for rec, events in decode_alignments(self.bam, self.fa, mode="raw")}
        self.assertEqual(out["r3"], [Event("mismatch", 1, 0, 0), Event("mismatch", 1, 2, 2)])

    def test_strict(self):
        with self.assertRaises(SequenceOutOfBounds):
            list(decode_alignments(self.bam, self.fa, strict=True))


if __name__ == "__main__":
    unittest.main()
