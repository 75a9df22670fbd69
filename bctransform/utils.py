import argparse
import gzip
import json
import logging
import re
import sys
import time
from datetime import timedelta
from functools import wraps

GZIP_MAGIC = b"\x1f\x8b"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_log_level = logging.WARNING

COMPLEMENT = str.maketrans("ACGTNacgtn", "TGCANtgcan")
INVALID_BASE = re.compile(r"[^ACGTNacgtn]")


class FileAccessError(OSError):
    pass


class InvalidSymbolError(ValueError):
    pass


def _open(file_name, mode="rt", opener=open, **kwargs):
    try:
        return opener(file_name, mode=mode, **kwargs)
    except OSError as e:
        raise FileAccessError(f'Could not open file "{file_name}": {e.strerror}') from e


def is_gzipped_file(file_name) -> bool:
    """check the first two bytes for the gzip magic number"""
    with _open(file_name, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def openfile(file_name, mode="rt", **kwargs):
    """open gzip or plain file.
    Reading: gzip is detected from the content. Writing: from the '.gz' suffix, with fast compression.
    """
    if "r" in mode:
        gzipped = is_gzipped_file(file_name)
    else:
        gzipped = str(file_name).endswith(".gz")
        if gzipped:
            kwargs.setdefault("compresslevel", 1)
    return _open(file_name, mode, opener=gzip.open if gzipped else open, **kwargs)


def read_one_col(fn):
    """read one column file into list. skip empty lines"""
    with openfile(fn) as f:
        return [x.strip() for x in f if x.strip()]


def write_one_col(a: list[str], fn):
    """write list into one column file"""
    with openfile(fn, "wt") as f:
        f.write("\n".join(a))
        f.write("\n")


def write_json(data, fn):
    with openfile(fn, "wt") as f:
        json.dump(data, f, indent=4)


def get_logger(name, level=None):
    """out to stderr"""
    logger = logging.getLogger(name)
    logger.setLevel(_log_level if level is None else level)
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)
        logger.propagate = False
    return logger


def set_log_level(level, prefix=__package__):
    """set level of all loggers under prefix, including loggers created later"""
    global _log_level
    _log_level = level
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def add_log(func):
    """
    logging start and done.
    """
    logger = get_logger(f"{func.__module__}.{func.__qualname__}")

    @wraps(func)
    def wrapper(*args, **kwargs):
        logger.info("start...")
        start = time.time()
        result = func(*args, **kwargs)
        end = time.time()
        used = timedelta(seconds=end - start)
        logger.info("done. time used: %s", used)
        return result

    wrapper.logger = logger
    return wrapper


def _check_bases(seq: str):
    m = INVALID_BASE.search(seq)
    if m:
        raise InvalidSymbolError(f"Invalid nucleotide '{m.group()}' at position {m.start()} in sequence: {seq}")


def complement(seq: str) -> str:
    """
    >>> complement("ATCGNat")
    'TAGCNta'
    """
    _check_bases(seq)
    return seq.translate(COMPLEMENT)


def reverse_complement(seq: str) -> str:
    """Returns the reverse complement of a DNA sequence, allowing 'N' bases. Case is kept.
    >>> reverse_complement("ATCGNTA")
    'TANCGAT'
    >>> reverse_complement("aacC")
    'Ggtt'
    """
    return complement(seq)[::-1]


class ArgumentParser(argparse.ArgumentParser):
    """exit with status 1 on usage error or help request"""

    def exit(self, status=0, message=None):
        super().exit(status or 1, message)

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def add_verbose_arg(parser):
    parser.add_argument("-v", "--verbose", action="store_true", help="show more details and progress updates.")


def set_verbose(verbose):
    set_log_level(logging.INFO if verbose else logging.WARNING)
