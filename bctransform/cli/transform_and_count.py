#!/usr/bin/env python3
"""
Transform and count cell barcodes from a 10X snATAC-seq library.
Detect where the barcode is in the barcode reads and whether it is reverse complemented,
then write a fastq of barcodes and a file of barcode counts.
"""

from bctransform import detect, transform, utils
from bctransform.whitelist import Whitelist

logger = utils.get_logger(__name__)


def run(args):
    whitelist = Whitelist.from_file(args.barcode_whitelist)
    best_transform = detect.detect_transform(args.input_file, whitelist, args.check_first)

    logger.info("Transforming records...")
    runner = transform.TransformCounter(
        args.input_file, best_transform, whitelist, args.output_fastq, too_short=args.too_short
    )
    metrics = runner.run()
    transform.write_counts(runner.counts, args.output_counts)
    if args.metrics:
        utils.write_json(metrics, args.metrics)
    logger.info("Done.")
    return metrics


def get_parser():
    parser = utils.ArgumentParser(description=__doc__.strip().splitlines()[0])
    utils.add_verbose_arg(parser)
    parser.add_argument(
        "--check-first",
        default=detect.DEFAULT_CHECK_FIRST,
        type=int,
        help=f"number of records used to detect the transform (default: {detect.DEFAULT_CHECK_FIRST})",
    )
    parser.add_argument(
        "--too-short",
        choices=transform.TOO_SHORT_POLICIES,
        default="clamp",
        help="what to do with reads shorter than offset + barcode length (default: clamp)",
    )
    parser.add_argument("--metrics", help="write run metrics to this json file")
    parser.add_argument("input_file", help="fastq file of barcode reads")
    parser.add_argument("barcode_whitelist", help="barcode whitelist")
    parser.add_argument("output_fastq", help="fastq file of barcodes. gzipped if it ends with .gz")
    parser.add_argument("output_counts", help="file of barcode counts")
    return parser


def main(argv=None):
    args = get_parser().parse_args(argv)
    utils.set_verbose(args.verbose)
    run(args)


if __name__ == "__main__":
    main()
