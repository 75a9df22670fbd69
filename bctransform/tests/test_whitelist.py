import os
import tempfile
import unittest

from bctransform import utils, whitelist


class TestWhitelist(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.fn = os.path.join(self.tmp.name, "whitelist.txt")

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, lines):
        with open(self.fn, "w") as f:
            f.write("\n".join(lines) + "\n")

    def test_read(self):
        self.write(["AACC", "GGTT", "AACC"])
        barcodes, length = whitelist.read_whitelist(self.fn)
        self.assertEqual(barcodes, {"AACC", "GGTT"})
        self.assertEqual(length, 4)

    def test_inconsistent_length(self):
        self.write(["AACC", "GGT"])
        with self.assertRaises(whitelist.InconsistentBarcodeLengthError):
            whitelist.read_whitelist(self.fn)

    def test_empty(self):
        self.write([])
        with self.assertRaises(whitelist.WhitelistError):
            whitelist.Whitelist.from_file(self.fn)

    def test_reverse_complement_set(self):
        self.write(["AACC", "ACGT"])
        wl = whitelist.Whitelist.from_file(self.fn)
        self.assertEqual(wl.barcodes_rc, {"GGTT", "ACGT"})
        self.assertEqual(wl.length, 4)
        self.assertEqual(len(wl), 2)
        self.assertIn("AACC", wl)
        self.assertNotIn("GGTT", wl)

    def test_invalid_base(self):
        with self.assertRaises(utils.InvalidSymbolError):
            whitelist.Whitelist(["AACX"])


if __name__ == "__main__":
    unittest.main()
