#!/usr/bin/env python3
"""
Compare barcode reads to the barcode whitelist to infer the barcode offset and whether it needs to be
reverse complemented. Prints offset, length and reverse_complement separated by tabs.
"""

from bctransform import detect, utils
from bctransform.whitelist import Whitelist


def main(argv=None):
    parser = utils.ArgumentParser(description=__doc__.strip().splitlines()[0])
    utils.add_verbose_arg(parser)
    parser.add_argument(
        "--check-first",
        default=detect.DEFAULT_CHECK_FIRST,
        type=int,
        help=f"check no more than this number of records (default: {detect.DEFAULT_CHECK_FIRST})",
    )
    parser.add_argument("--table", help="write match counts per offset to this tsv file")
    parser.add_argument("input_file", help="fastq file of barcode reads")
    parser.add_argument("barcode_whitelist", help="barcode whitelist")
    args = parser.parse_args(argv)
    utils.set_verbose(args.verbose)

    whitelist = Whitelist.from_file(args.barcode_whitelist)
    runner = detect.TransformDetector(whitelist, args.check_first)
    best_transform = runner.run(args.input_file)
    if args.table:
        runner.match_table().to_csv(args.table, sep="\t")
    print(best_transform)


if __name__ == "__main__":
    main()
