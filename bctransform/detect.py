"""
Auto detect barcode offset and orientation from the first reads of a fastq file
"""

from collections import defaultdict
from typing import NamedTuple

import pandas as pd

from bctransform import fastq, utils
from bctransform.whitelist import Whitelist

logger = utils.get_logger(__name__)

DEFAULT_CHECK_FIRST = 10000
FORWARD = "forward"
RC = "reverse_complement"


class Transform(NamedTuple):
    offset: int
    length: int
    reverse_complement: bool

    def __str__(self):
        return f"{self.offset}\t{self.length}\t{str(self.reverse_complement).lower()}"


class TransformDetector:
    """
    Count, for every offset, how many sampled reads have a whitelist barcode (forward) or a reverse complemented
    whitelist barcode at that offset. The offset with the most matches wins; forward wins ties.
    """

    def __init__(self, whitelist: Whitelist, max_read=DEFAULT_CHECK_FIRST):
        self.whitelist = whitelist
        self.max_read = max_read
        self.match_counts = defaultdict(int)
        self.rc_match_counts = defaultdict(int)
        self.n_read = 0
        self.best_match_count = 0

    def add_sequence(self, seq: str):
        length = self.whitelist.length
        self.n_read += 1
        for offset in range(len(seq) - length + 1):
            sub = seq[offset : offset + length]
            if sub in self.whitelist.barcodes:
                self.match_counts[offset] += 1
            if sub in self.whitelist.barcodes_rc:
                self.rc_match_counts[offset] += 1

    def match_table(self) -> pd.DataFrame:
        """
        Returns:
            DataFrame indexed by offset with columns forward and reverse_complement
        """
        df = pd.DataFrame(
            {FORWARD: pd.Series(self.match_counts, dtype=int), RC: pd.Series(self.rc_match_counts, dtype=int)}
        )
        df = df.fillna(0).astype(int).sort_index()
        df.index.name = "offset"
        return df

    def best(self) -> Transform:
        """
        >>> detector = TransformDetector(Whitelist({"AACC"}))
        >>> for seq in ["NNAACCNN", "NNGGTTNN"]:
        ...     detector.add_sequence(seq)
        >>> detector.best()
        Transform(offset=2, length=4, reverse_complement=False)
        """
        df = self.match_table()
        offset, rc, best_count = 0, False, 0
        if not df.empty:
            if df[FORWARD].max() > best_count:
                offset, best_count = int(df[FORWARD].idxmax()), int(df[FORWARD].max())
            if df[RC].max() > best_count:
                offset, best_count, rc = int(df[RC].idxmax()), int(df[RC].max()), True
        self.best_match_count = best_count
        return Transform(offset, self.whitelist.length, rc)

    @utils.add_log
    def run(self, fq) -> Transform:
        logger.info(f"Reading the first {self.max_read} records from {fq}...")
        for record in fastq.FastqReader(fq, first_n=self.max_read):
            self.add_sequence(record.sequence)
        transform = self.best()
        self.report(transform)
        return transform

    def report(self, transform: Transform):
        if self.best_match_count == 0:
            logger.warning(
                f"No whitelist barcode found in {self.n_read} sampled records. "
                "Falling back to offset 0 without reverse complement."
            )
            return
        percent = 100 * self.best_match_count / self.n_read
        logger.info(
            f"Best offset: {transform.offset}, best rc: {transform.reverse_complement}, "
            f"best match count: {self.best_match_count} out of {self.n_read} records ({percent:.2f}%)"
        )
        if percent < 50:
            logger.warning("Less than 50% of the sampled records support the detected transform.")


def detect_transform(fq, whitelist: Whitelist, check_first=DEFAULT_CHECK_FIRST) -> Transform:
    return TransformDetector(whitelist, check_first).run(fq)
