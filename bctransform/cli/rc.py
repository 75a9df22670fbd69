#!/usr/bin/env python3
"""
Reverse complement every barcode in a one column file.
"""

from bctransform import utils


def process_file(input_file, output_file):
    barcodes = utils.read_one_col(input_file)
    utils.write_one_col([utils.reverse_complement(bc) for bc in barcodes], output_file)


def main(argv=None):
    parser = utils.ArgumentParser(description=__doc__.strip())
    parser.add_argument("input_file", help="one barcode per line. may be gzipped")
    parser.add_argument("output_file", help="gzipped if it ends with .gz")
    args = parser.parse_args(argv)
    process_file(args.input_file, args.output_file)


if __name__ == "__main__":
    main()
