import unittest

from werkzeug.exceptions import RequestedRangeNotSatisfiable

from videolib.streaming import parse_range


class TestParseRange(unittest.TestCase):
    def test_no_header_means_whole_file(self):
        self.assertIsNone(parse_range(None, 1000))
        self.assertIsNone(parse_range("", 1000))

    def test_explicit_window(self):
        self.assertEqual(parse_range("bytes=0-99", 1000), (0, 99))
        self.assertEqual(parse_range("bytes=10-10", 1000), (10, 10))

    def test_open_end_defaults_to_last_byte(self):
        self.assertEqual(parse_range("bytes=500-", 1000), (500, 999))

    def test_end_is_clamped(self):
        self.assertEqual(parse_range("bytes=900-5000", 1000), (900, 999))

    def test_suffix_range(self):
        self.assertEqual(parse_range("bytes=-100", 1000), (900, 999))
        self.assertEqual(parse_range("bytes=-5000", 1000), (0, 999))

    def test_malformed_or_multi_range_is_ignored(self):
        for header in ["bytes=abc", "items=0-1", "bytes=0-1,5-6", "bytes=-", "0-99"]:
            self.assertIsNone(parse_range(header, 1000), header)

    def test_unsatisfiable(self):
        for header in ["bytes=1000-", "bytes=2000-3000", "bytes=50-10", "bytes=-0"]:
            with self.assertRaises(RequestedRangeNotSatisfiable):
                parse_range(header, 1000)

    def test_empty_file(self):
        with self.assertRaises(RequestedRangeNotSatisfiable):
            parse_range("bytes=0-", 0)


if __name__ == '__main__':
    unittest.main()
