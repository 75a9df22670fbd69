import os
import tempfile
import unittest

from bctransform import detect
from bctransform.whitelist import Whitelist


def write_fastq(fn, seqs):
    with open(fn, "w") as f:
        for i, seq in enumerate(seqs):
            f.write(f"@read{i}\n{seq}\n+\n{'I' * len(seq)}\n")


class TestTransformDetector(unittest.TestCase):
    def setUp(self):
        self.whitelist = Whitelist({"AACC"})

    def detect(self, seqs):
        detector = detect.TransformDetector(self.whitelist)
        for seq in seqs:
            detector.add_sequence(seq)
        return detector.best()

    def test_forward(self):
        self.assertEqual(self.detect(["NNAACCNN"]), detect.Transform(2, 4, False))

    def test_reverse_complement(self):
        self.assertEqual(self.detect(["NNGGTTNN"]), detect.Transform(2, 4, True))

    def test_tie_prefers_forward(self):
        self.assertEqual(self.detect(["NNAACCNN", "NNNGGTTN"]), detect.Transform(2, 4, False))

    def test_reverse_complement_strictly_larger(self):
        transform = self.detect(["NNAACCNN", "NNNGGTTN", "ANNGGTTN"])
        self.assertEqual(transform, detect.Transform(3, 4, True))

    def test_most_matches_wins(self):
        transform = self.detect(["AACCNNNN", "NAACCNNN", "NAACCNNN", "NNNNAACC"])
        self.assertEqual(transform.offset, 1)

    def test_equal_counts_pick_smallest_offset(self):
        transform = self.detect(["NNNNAACC", "AACCNNNN"])
        self.assertEqual(transform, detect.Transform(0, 4, False))

    def test_no_match(self):
        detector = detect.TransformDetector(self.whitelist)
        for seq in ["NNNNNNNN", "ACGTACGT"]:
            detector.add_sequence(seq)
        self.assertEqual(detector.best(), detect.Transform(0, 4, False))
        self.assertEqual(detector.best_match_count, 0)

    def test_empty_sample(self):
        self.assertEqual(self.detect([]), detect.Transform(0, 4, False))

    def test_short_reads_are_ignored(self):
        self.assertEqual(self.detect(["AAC", "NNGGTTNN"]), detect.Transform(2, 4, True))

    def test_window_counts_in_both_sets(self):
        # ACGT is its own reverse complement
        detector = detect.TransformDetector(Whitelist({"ACGT"}))
        detector.add_sequence("NACGTN")
        df = detector.match_table()
        self.assertEqual(df.loc[1, detect.FORWARD], 1)
        self.assertEqual(df.loc[1, detect.RC], 1)
        self.assertEqual(detector.best(), detect.Transform(1, 4, False))

    def test_match_table(self):
        detector = detect.TransformDetector(self.whitelist)
        for seq in ["NNAACCNN", "GGTTNNNN"]:
            detector.add_sequence(seq)
        df = detector.match_table()
        self.assertEqual(list(df.index), [0, 2])
        self.assertEqual(df.loc[2, detect.FORWARD], 1)
        self.assertEqual(df.loc[2, detect.RC], 0)
        self.assertEqual(df.loc[0, detect.RC], 1)


class TestDetectFromFile(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.fq = os.path.join(self.tmp.name, "reads.fq")

    def tearDown(self):
        self.tmp.cleanup()

    def test_run(self):
        write_fastq(self.fq, ["NNGGTTNN"] * 3 + ["NNAACCNN"])
        transform = detect.detect_transform(self.fq, Whitelist({"AACC"}))
        self.assertEqual(transform, detect.Transform(2, 4, True))

    def test_check_first(self):
        write_fastq(self.fq, ["NNAACCNN"] + ["NNNGGTTN"] * 3)
        detector = detect.TransformDetector(Whitelist({"AACC"}), max_read=1)
        self.assertEqual(detector.run(self.fq), detect.Transform(2, 4, False))
        self.assertEqual(detector.n_read, 1)

    def test_str(self):
        self.assertEqual(str(detect.Transform(2, 4, True)), "2\t4\ttrue")


if __name__ == "__main__":
    unittest.main()
