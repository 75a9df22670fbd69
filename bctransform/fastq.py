"""
four-line fastq records
"""

from bctransform import utils

logger = utils.get_logger(__name__)


class FastqRecord:
    __slots__ = ("name", "sequence", "comment", "quality")

    def __init__(self, name: str, sequence: str, comment: str, quality: str):
        self.name = name
        self.sequence = sequence
        self.comment = comment
        self.quality = quality

    def transform(self, offset: int, length: int, rc: bool = False):
        """Keep [offset, offset + length) of sequence and quality. If rc, reverse complement the sequence and
        reverse the quality.

        >>> record = FastqRecord("@r1", "NNGGTTNN", "+", "ABCDEFGH")
        >>> record.transform(2, 4, rc=True)
        >>> record.sequence, record.quality
        ('AACC', 'FEDC')
        """
        self.sequence = self.sequence[offset : offset + length]
        self.quality = self.quality[offset : offset + length]
        if rc:
            self.sequence = utils.reverse_complement(self.sequence)
            self.quality = self.quality[::-1]

    def __str__(self):
        return f"{self.name}\n{self.sequence}\n{self.comment}\n{self.quality}\n"

    def __repr__(self):
        return f"FastqRecord({self.name!r}, {self.sequence!r}, {self.comment!r}, {self.quality!r})"

    def __eq__(self, other):
        if not isinstance(other, FastqRecord):
            return NotImplemented
        return (self.name, self.sequence, self.comment, self.quality) == (
            other.name,
            other.sequence,
            other.comment,
            other.quality,
        )


class FastqReader:
    """
    Iterate records from a plain or gzipped fastq file.
    A partial record at the end of the file is dropped; self.truncated is set to 1 when that happens.
    """

    def __init__(self, fq, first_n=None):
        self.fq = fq
        self.first_n = first_n
        self.records = 0
        self.truncated = 0

    def __iter__(self):
        self.records = self.truncated = 0
        with utils.openfile(self.fq) as f:
            lines = []
            for line in f:
                if self.first_n is not None and self.records >= self.first_n:
                    return
                lines.append(line.rstrip("\r\n"))
                if len(lines) == 4:
                    self.records += 1
                    yield FastqRecord(*lines)
                    lines = []
            if lines and (self.first_n is None or self.records < self.first_n):
                self.truncated = 1
                logger.warning(
                    f"{self.fq}: dropped a partial record of {len(lines)} line(s) at the end of the file. "
                    f"{self.records} complete records read."
                )


def read_fastq(fq, first_n=None) -> list[FastqRecord]:
    """read at most first_n records into list"""
    return list(FastqReader(fq, first_n))
