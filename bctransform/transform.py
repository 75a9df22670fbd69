"""
Apply the detected transform to every read, write the transformed fastq and count barcodes
"""

from collections import defaultdict

import pandas as pd

from bctransform import fastq, utils
from bctransform.detect import Transform
from bctransform.whitelist import Whitelist

logger = utils.get_logger(__name__)

PROGRESS_INTERVAL = 1_000_000
TOO_SHORT_POLICIES = ("clamp", "skip", "abort")


class RecordTooShortError(ValueError):
    pass


class TransformCounter:
    def __init__(self, fq, transform: Transform, whitelist: Whitelist, out_fq, too_short="clamp"):
        if too_short not in TOO_SHORT_POLICIES:
            raise ValueError(f"too_short must be one of {TOO_SHORT_POLICIES}, got: {too_short}")
        self.fq = fq
        self.transform = transform
        self.whitelist = whitelist
        self.out_fq = out_fq
        self.too_short = too_short

        # outputs
        self.counts = defaultdict(int)
        self.metrics = {}

    def transform_record(self, record: fastq.FastqRecord) -> bool:
        """
        Returns:
            False if the record should be skipped
        """
        offset, length, rc = self.transform
        if len(record.sequence) < offset + length:
            self.metrics["too_short"] += 1
            if self.too_short == "abort":
                raise RecordTooShortError(
                    f"Record {record.name} has {len(record.sequence)} bases; "
                    f"barcode needs {offset + length} (offset {offset}, length {length})."
                )
            if self.too_short == "skip":
                self.metrics["skipped"] += 1
                return False
        record.transform(offset, length, rc)
        return True

    @utils.add_log
    def run(self) -> dict:
        self.counts.clear()
        self.metrics = dict.fromkeys(["records", "written", "too_short", "skipped"], 0)
        reader = fastq.FastqReader(self.fq)
        with utils.openfile(self.out_fq, "wt") as out_fh:
            for record in reader:
                self.metrics["records"] += 1
                if self.metrics["records"] % PROGRESS_INTERVAL == 0:
                    logger.info(f"Processed {self.metrics['records']} records so far...")
                if not self.transform_record(record):
                    continue
                self.counts[record.sequence] += 1
                out_fh.write(str(record))
                self.metrics["written"] += 1
        self.metrics["truncated"] = reader.truncated
        self.add_summary()
        return self.metrics

    def add_summary(self):
        whitelist_matches = sum(n for bc, n in self.counts.items() if bc in self.whitelist)
        written = self.metrics["written"]
        self.metrics.update(
            {
                "distinct_barcodes": len(self.counts),
                "whitelist_matches": whitelist_matches,
                "whitelist_match_percent": round(100 * whitelist_matches / written, 2) if written else 0.0,
                "offset": self.transform.offset,
                "length": self.transform.length,
                "reverse_complement": self.transform.reverse_complement,
            }
        )
        logger.info(f"Transformed {self.metrics['records']} records.")
        logger.info(f"{self.metrics['whitelist_match_percent']}% of transformed barcodes matched the whitelist")
        if self.metrics["too_short"]:
            action = "skipped" if self.too_short == "skip" else "clamped"
            logger.warning(
                f"{self.metrics['too_short']} records were shorter than offset + length "
                f"({self.transform.offset + self.transform.length}) and were {action}."
            )


def write_counts(counts: dict, fn):
    """tab-separated barcode and count, sorted by barcode"""
    s = pd.Series(counts, dtype="int64").sort_index()
    with utils.openfile(fn, "wt") as f:
        s.to_csv(f, sep="\t", header=False, lineterminator="\n")


def read_counts(fn) -> dict[str, int]:
    try:
        df = pd.read_csv(
            fn, sep="\t", header=None, names=["barcode", "count"], dtype={"barcode": str}, keep_default_na=False
        )
    except pd.errors.EmptyDataError:
        return {}
    return {bc: int(n) for bc, n in zip(df["barcode"], df["count"])}
