"""
Unit Tests for TLE Parser

Run with:
    python -m pytest tests/test_tle_parser.py -v
"""

import unittest
from datetime import datetime, timezone

from sgp4.api import Satrec

from orbit_tracker.errors import ChecksumError, FormatError, ParseError
from orbit_tracker.tle_parser import TLEParser, parse_tle

ISS_LINE1 = "1 25544U 98067A   24235.53307911  .00018417  00000+0  33452-3 0  9995"
ISS_LINE2 = "2 25544  51.6443  40.1893 0005352  58.1370  58.2267 15.50206503447348"

# Same elements as published in the tracker UI, with stale checksum digits
ISS_STALE_LINE1 = "1 25544U 98067A   24235.53307911  .00018417  00000+0  33452-3 0  9991"
ISS_STALE_LINE2 = "2 25544  51.6443  40.1893 0005352  58.1370  58.2267 15.50206503447343"


def with_checksum(line):
    """Replace column 69 with the checksum of columns 1-68."""
    return line[:68] + str(TLEParser.compute_checksum(line))


class TestTLEParsing(unittest.TestCase):
    """Field decoding of valid TLE pairs."""

    def setUp(self):
        self.parser = TLEParser()

    def test_iss_fields(self):
        """Test every decoded field of the ISS TLE."""
        elements = self.parser.parse_tle(ISS_LINE1, ISS_LINE2)

        self.assertEqual(elements.catalog_number, 25544)
        self.assertEqual(elements.classification, "U")
        self.assertEqual(elements.international_designator, "98067A")
        self.assertEqual(elements.epoch_year, 24)
        self.assertAlmostEqual(elements.epoch_day, 235.53307911, places=8)
        self.assertAlmostEqual(elements.mean_motion_dot, 0.00018417, places=10)
        self.assertEqual(elements.mean_motion_ddot, 0.0)
        self.assertAlmostEqual(elements.bstar, 0.33452e-3, places=10)
        self.assertEqual(elements.ephemeris_type, 0)
        self.assertEqual(elements.element_set_number, 999)
        self.assertAlmostEqual(elements.inclination, 51.6443, places=4)
        self.assertAlmostEqual(elements.raan, 40.1893, places=4)
        self.assertAlmostEqual(elements.eccentricity, 0.0005352, places=7)
        self.assertAlmostEqual(elements.arg_perigee, 58.1370, places=4)
        self.assertAlmostEqual(elements.mean_anomaly, 58.2267, places=4)
        self.assertAlmostEqual(elements.mean_motion, 15.50206503, places=8)
        self.assertEqual(elements.revolution_number, 44734)
        self.assertEqual(elements.checksum1, 5)
        self.assertEqual(elements.checksum2, 8)

    def test_epoch_datetime(self):
        """Test conversion of the epoch to a UTC datetime."""
        elements = parse_tle(ISS_LINE1, ISS_LINE2)

        self.assertEqual(elements.epoch.tzinfo, timezone.utc)
        self.assertEqual(
            elements.epoch.replace(microsecond=0),
            datetime(2024, 8, 22, 12, 47, 38, tzinfo=timezone.utc),
        )

    def test_twentieth_century_epoch(self):
        """Test that two-digit years of 57 or more map to the 1900s."""
        line1 = "1 11801U          80230.29629788  .00000096  00000-0  00000-0 0    14"
        line2 = "2 11801  46.7916 230.4354 7318036  47.4722  10.4117  2.28537848    13"

        elements = parse_tle(line1, line2)

        self.assertEqual(elements.epoch.year, 1980)
        self.assertEqual(elements.international_designator, "")
        self.assertAlmostEqual(elements.eccentricity, 0.7318036, places=7)

    def test_negative_exponent_fields(self):
        """Test implied-decimal exponent decoding."""
        line1 = "1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4753"
        line2 = "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667"

        elements = parse_tle(line1, line2)

        self.assertEqual(elements.catalog_number, 5)
        self.assertAlmostEqual(elements.bstar, 2.8098e-5, places=12)
        self.assertEqual(elements.mean_motion_ddot, 0.0)
        self.assertEqual(elements.epoch.year, 2000)

    def test_surrounding_whitespace_is_ignored(self):
        """Test that surrounding whitespace and line endings are stripped."""
        elements = parse_tle("  " + ISS_LINE1 + "  \n", "\t" + ISS_LINE2 + "\r\n")

        self.assertEqual(elements.catalog_number, 25544)
        self.assertEqual(elements.line1, ISS_LINE1)
        self.assertEqual(elements.line2, ISS_LINE2)

    def test_alpha5_catalog_number(self):
        """Test Alpha-5 catalog number decoding."""
        line1 = "1 A0001U 98067A   24235.53307911  .00018417  00000+0  33452-3 0  9996"
        line2 = "2 A0001  51.6443  40.1893 0005352  58.1370  58.2267 15.50206503447349"

        elements = parse_tle(line1, line2)

        self.assertEqual(elements.catalog_number, 100001)

    def test_period_and_orbit_class(self):
        """Test the period and the deep-space classification."""
        iss = parse_tle(ISS_LINE1, ISS_LINE2)
        self.assertAlmostEqual(iss.period_minutes, 1440.0 / 15.50206503, places=6)
        self.assertFalse(iss.is_deep_space)

        deep = parse_tle(
            "1 11801U          80230.29629788  .00000096  00000-0  00000-0 0    14",
            "2 11801  46.7916 230.4354 7318036  47.4722  10.4117  2.28537848    13",
        )
        self.assertTrue(deep.is_deep_space)

    def test_checksum_computation(self):
        """Test the modulo-10 checksum."""
        self.assertEqual(TLEParser.compute_checksum(ISS_LINE1), 5)
        self.assertEqual(TLEParser.compute_checksum(ISS_LINE2), 8)


class TestTLEValidation(unittest.TestCase):
    """Rejection of malformed or corrupted TLE pairs."""

    def test_stale_checksum_line1(self):
        """Test that a wrong line 1 checksum is reported with both digits."""
        with self.assertRaises(ChecksumError) as ctx:
            parse_tle(ISS_STALE_LINE1, ISS_STALE_LINE2)

        self.assertEqual(ctx.exception.line_number, 1)
        self.assertEqual(ctx.exception.expected, 5)
        self.assertEqual(ctx.exception.actual, 1)

    def test_stale_checksum_line2(self):
        """Test that a wrong line 2 checksum is reported with both digits."""
        with self.assertRaises(ChecksumError) as ctx:
            parse_tle(ISS_LINE1, ISS_STALE_LINE2)

        self.assertEqual(ctx.exception.line_number, 2)
        self.assertEqual(ctx.exception.expected, 8)
        self.assertEqual(ctx.exception.actual, 3)

    def test_every_corrupted_checksum_digit_is_rejected(self):
        """Test that every wrong checksum digit is rejected."""
        for digit in "0123456789":
            if digit == ISS_LINE1[68]:
                continue
            with self.assertRaises(ChecksumError):
                parse_tle(ISS_LINE1[:68] + digit, ISS_LINE2)

    def test_wrong_length(self):
        """Test that lines not 69 characters long are rejected."""
        with self.assertRaises(FormatError):
            parse_tle(ISS_LINE1[:68], ISS_LINE2)
        with self.assertRaises(FormatError):
            parse_tle(ISS_LINE1, ISS_LINE2 + "0")

    def test_wrong_line_number(self):
        """Test that swapped lines are rejected."""
        with self.assertRaises(FormatError):
            parse_tle(ISS_LINE2, ISS_LINE1)

    def test_non_digit_checksum(self):
        """Test that a non-digit checksum column is a format error."""
        with self.assertRaises(FormatError):
            parse_tle(ISS_LINE1[:68] + "X", ISS_LINE2)

    def test_catalog_mismatch(self):
        """Test that differing catalog numbers are rejected."""
        line2 = "2 25545  51.6443  40.1893 0005352  58.1370  58.2267 15.50206503447349"
        with self.assertRaises(FormatError):
            parse_tle(ISS_LINE1, line2)

    def test_invalid_numeric_field(self):
        """Test that a letter in a numeric field is rejected."""
        line2 = "2 25544  51.6A43  40.1893 0005352  58.1370  58.2267 15.50206503447344"
        with self.assertRaises(FormatError):
            parse_tle(ISS_LINE1, line2)

    def test_non_finite_fields_are_rejected(self):
        """Test that nan/inf spellings accepted by float() are rejected."""
        line1_cases = [
            ISS_LINE1[:20] + "         nan" + ISS_LINE1[32:],
            ISS_LINE1[:33] + "       inf" + ISS_LINE1[43:],
            ISS_LINE1[:53] + "     nan" + ISS_LINE1[61:],
        ]
        line2_cases = [
            ISS_LINE2[:8] + "     nan" + ISS_LINE2[16:],
            ISS_LINE2[:17] + "     inf" + ISS_LINE2[25:],
            ISS_LINE2[:43] + "infinity" + ISS_LINE2[51:],
            ISS_LINE2[:52] + "        NaN" + ISS_LINE2[63:],
        ]
        for line1 in line1_cases:
            with self.subTest(line1=line1), self.assertRaises(FormatError):
                parse_tle(with_checksum(line1), ISS_LINE2)
        for line2 in line2_cases:
            with self.subTest(line2=line2), self.assertRaises(FormatError):
                parse_tle(ISS_LINE1, with_checksum(line2))

    def test_underscore_digit_separators_are_rejected(self):
        """Test that '15.5_206503' style fields raise FormatError."""
        line2_cases = [
            ISS_LINE2[:52] + "15.5_206503" + ISS_LINE2[63:],
            ISS_LINE2[:8] + " 51.6_43" + ISS_LINE2[16:],
            ISS_LINE2[:63] + "4_734" + ISS_LINE2[68:],
        ]
        for line2 in line2_cases:
            with self.subTest(line2=line2), self.assertRaises(FormatError):
                parse_tle(ISS_LINE1, with_checksum(line2))

        with self.assertRaises(FormatError):
            parse_tle(with_checksum(ISS_LINE1[:64] + " 9_9" + ISS_LINE1[68:]), ISS_LINE2)

    def test_malformed_exponent_and_eccentricity(self):
        """Test that implied-decimal fields only accept digits and signs."""
        with self.assertRaises(FormatError):
            parse_tle(with_checksum(ISS_LINE1[:53] + " 3.452-3" + ISS_LINE1[61:]), ISS_LINE2)
        with self.assertRaises(FormatError):
            parse_tle(ISS_LINE1, with_checksum(ISS_LINE2[:26] + "-005352" + ISS_LINE2[33:]))

    def test_mean_motion_matches_sgp4_record(self):
        """Test that the decoded mean motion is the one SGP4 propagates."""
        elements = parse_tle(ISS_LINE1, ISS_LINE2)
        satrec = Satrec.twoline2rv(ISS_LINE1, ISS_LINE2)

        self.assertAlmostEqual(
            elements.mean_motion_rad_per_min, satrec.no_kozai, places=12
        )

    def test_parse_errors_are_value_errors(self):
        """Test the parse error hierarchy."""
        self.assertTrue(issubclass(FormatError, ParseError))
        self.assertTrue(issubclass(ChecksumError, ParseError))
        self.assertTrue(issubclass(ParseError, ValueError))


if __name__ == "__main__":
    unittest.main()
