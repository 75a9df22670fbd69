from bctransform import utils

logger = utils.get_logger(__name__)


class WhitelistError(ValueError):
    pass


class InconsistentBarcodeLengthError(WhitelistError):
    pass


def barcode_length(barcodes) -> int:
    """
    >>> barcode_length({"AACC", "GGTT"})
    4
    """
    lengths = {len(bc) for bc in barcodes}
    if not lengths:
        raise WhitelistError("Whitelist contains no barcodes.")
    if len(lengths) > 1:
        raise InconsistentBarcodeLengthError(
            f"Barcodes in the whitelist are not all the same length. Found lengths: {sorted(lengths)}"
        )
    return lengths.pop()


def read_whitelist(fn) -> tuple[set[str], int]:
    """
    Returns:
        barcodes, barcode length
    """
    barcodes = set(utils.read_one_col(fn))
    return barcodes, barcode_length(barcodes)


class Whitelist:
    """barcode set, its reverse complement set and the common barcode length"""

    def __init__(self, barcodes):
        self.barcodes = frozenset(barcodes)
        self.length = barcode_length(self.barcodes)
        self.barcodes_rc = frozenset(utils.reverse_complement(bc) for bc in self.barcodes)

    @classmethod
    def from_file(cls, fn):
        barcodes, _length = read_whitelist(fn)
        whitelist = cls(barcodes)
        logger.info(f"Whitelist size: {len(whitelist)}")
        logger.info(f"Inferred barcode length: {whitelist.length}")
        return whitelist

    def __len__(self):
        return len(self.barcodes)

    def __contains__(self, barcode):
        return barcode in self.barcodes
