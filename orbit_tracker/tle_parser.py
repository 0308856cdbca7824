"""
TLE Parser Module

Validates and decodes Two-Line Element (TLE) sets into an immutable
`OrbitalElements` record.

Field positions follow the NORAD fixed-column layout (columns are
1-indexed in the format documentation, 0-indexed slices below):

Line 1::

    1 NNNNNC NNNNNAAA NNNNN.NNNNNNNN +.NNNNNNNN +NNNNN-N +NNNNN-N N NNNNN
    | |    | |        |              |          |        |       | |   |
    | |    | |        |              |          |        |       | |   checksum [68]
    | |    | |        |              |          |        |       | element set [64:68]
    | |    | |        |              |          |        |       ephemeris type [62]
    | |    | |        |              |          |        B* drag [53:61]
    | |    | |        |              |          nddot / 6 [44:52]
    | |    | |        |              ndot / 2 [33:43]
    | |    | |        epoch year [18:20] + day of year [20:32]
    | |    | international designator [9:17]
    | |    classification [7]
    | catalog number [2:7]
    line number [0]

Line 2 carries inclination [8:16], RAAN [17:25], eccentricity with an
implied leading decimal point [26:33], argument of perigee [34:42],
mean anomaly [43:51], mean motion in rev/day [52:63] and the revolution
number [63:68].
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime

from orbit_tracker.constants import DEEP_SPACE_PERIOD_MINUTES, MINUTES_PER_DAY, TWOPI
from orbit_tracker.errors import ChecksumError, FormatError
from orbit_tracker.timeconv import epoch_to_datetime

logger = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69

# Alpha-5 catalog numbers: leading letter encodes the ten-thousands digit
ALPHA5_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"

# Column patterns. Python's float()/int() also accept 'nan', 'inf' and
# '1_000', none of which are valid TLE text.
DECIMAL_FIELD = re.compile(r" *[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+) *")
INTEGER_FIELD = re.compile(r" *[0-9]* *")
IMPLIED_DECIMAL_FIELD = re.compile(r"[0-9 ]*[0-9][0-9 ]*")
EXPONENTIAL_FIELD = re.compile(r"[ +-][0-9 ]{5}[ +-][0-9]| *")
CATALOG_FIELD = re.compile(r"[0-9]+|[A-HJ-NP-Z][0-9]{4}")
DIGITS = "0123456789"


@dataclass(frozen=True)
class OrbitalElements:
    """Mean orbital elements decoded from one TLE pair. Angles in degrees."""

    catalog_number: int
    classification: str
    international_designator: str
    epoch: datetime
    epoch_year: int
    epoch_day: float
    mean_motion_dot: float  # rev/day^2, first derivative / 2 as printed
    mean_motion_ddot: float  # rev/day^3, second derivative / 6 as printed
    bstar: float  # 1 / earth radii
    ephemeris_type: int
    element_set_number: int
    inclination: float
    raan: float
    eccentricity: float
    arg_perigee: float
    mean_anomaly: float
    mean_motion: float  # rev/day
    revolution_number: int
    checksum1: int
    checksum2: int
    line1: str
    line2: str

    @property
    def mean_motion_rad_per_min(self) -> float:
        return self.mean_motion * TWOPI / MINUTES_PER_DAY

    @property
    def period_minutes(self) -> float:
        """Kozai period from the printed mean motion; inf when it is zero."""
        if self.mean_motion <= 0.0:
            return math.inf
        return MINUTES_PER_DAY / self.mean_motion

    @property
    def is_deep_space(self) -> bool:
        return self.period_minutes >= DEEP_SPACE_PERIOD_MINUTES


class TLEParser:
    """
    Parser for Two-Line Element (TLE) sets.

    Validation order per line: length, line number, checksum. Catalog
    numbers are compared across the two lines before any field decoding.
    """

    def parse_tle(self, line1: str, line2: str) -> OrbitalElements:
        """
        Parse TLE lines into an `OrbitalElements` record.

        Args:
            line1: First line of TLE (surrounding whitespace is ignored)
            line2: Second line of TLE

        Returns:
            Fully populated OrbitalElements

        Raises:
            FormatError: Wrong length, line number, catalog mismatch or
                undecodable numeric field
            ChecksumError: Column 69 does not match the computed checksum
        """
        line1 = self._validate_line(line1, 1)
        line2 = self._validate_line(line2, 2)

        catalog1 = self._parse_catalog_number(line1[2:7], 1)
        catalog2 = self._parse_catalog_number(line2[2:7], 2)
        if catalog1 != catalog2:
            raise FormatError(
                f"Catalog number mismatch: line 1 has {catalog1}, line 2 has {catalog2}"
            )

        try:
            epoch_year = self._parse_integer(line1[18:20], "epoch year", required=True)
            epoch_day = self._parse_decimal(line1[20:32], "epoch day")
            elements = OrbitalElements(
                catalog_number=catalog1,
                classification=line1[7].strip() or "U",
                international_designator=line1[9:17].strip(),
                epoch=epoch_to_datetime(epoch_year, epoch_day),
                epoch_year=epoch_year,
                epoch_day=epoch_day,
                mean_motion_dot=self._parse_decimal(line1[33:43], "mean motion dot"),
                mean_motion_ddot=self._parse_exponential(line1[44:52]),
                bstar=self._parse_exponential(line1[53:61]),
                ephemeris_type=self._parse_integer(line1[62], "ephemeris type"),
                element_set_number=self._parse_integer(line1[64:68], "element set number"),
                inclination=self._parse_decimal(line2[8:16], "inclination"),
                raan=self._parse_decimal(line2[17:25], "RAAN"),
                eccentricity=self._parse_implied_decimal(line2[26:33]),
                arg_perigee=self._parse_decimal(line2[34:42], "argument of perigee"),
                mean_anomaly=self._parse_decimal(line2[43:51], "mean anomaly"),
                mean_motion=self._parse_decimal(line2[52:63], "mean motion"),
                revolution_number=self._parse_integer(line2[63:68], "revolution number"),
                checksum1=int(line1[68]),
                checksum2=int(line2[68]),
                line1=line1,
                line2=line2,
            )
        except (ValueError, OverflowError) as e:
            logger.debug(f"TLE field decoding failed for catalog {catalog1}: {e}")
            raise FormatError(f"Invalid numeric field in TLE: {e}") from e

        logger.debug(
            f"Parsed TLE {elements.catalog_number}: epoch {elements.epoch.isoformat()}, "
            f"{elements.mean_motion:.8f} rev/day"
        )
        return elements

    @staticmethod
    def compute_checksum(line: str) -> int:
        """Modulo-10 sum of the digits in columns 1-68, '-' counting as 1."""
        checksum = 0
        for char in line[:68]:
            if char in DIGITS:
                checksum += int(char)
            elif char == "-":
                checksum += 1
        return checksum % 10

    def _validate_line(self, line: str, line_number: int) -> str:
        line = line.strip()

        if len(line) != TLE_LINE_LENGTH:
            raise FormatError(
                f"Line {line_number} must be {TLE_LINE_LENGTH} characters, got {len(line)}"
            )
        if line[0] != str(line_number):
            raise FormatError(f"Line {line_number} must begin with '{line_number}'")
        if line[68] not in DIGITS:
            raise FormatError(f"Line {line_number} checksum column is not a digit")

        expected = self.compute_checksum(line)
        actual = int(line[68])
        if expected != actual:
            raise ChecksumError(line_number, expected, actual)

        return line

    @staticmethod
    def _parse_catalog_number(field: str, line_number: int) -> int:
        field = field.strip()
        if not CATALOG_FIELD.fullmatch(field):
            raise FormatError(f"Line {line_number} has invalid catalog number {field!r}")
        if field[0] in ALPHA5_LETTERS:
            # Alpha-5: A=10 .. Z=33, skipping I and O
            prefix = ALPHA5_LETTERS.index(field[0]) + 10
            return prefix * 10000 + int(field[1:])
        return int(field)

    @staticmethod
    def _parse_decimal(field: str, name: str) -> float:
        if not DECIMAL_FIELD.fullmatch(field):
            raise ValueError(f"{name} {field!r} is not a decimal number")
        return float(field)

    @staticmethod
    def _parse_integer(field: str, name: str, required: bool = False) -> int:
        if not INTEGER_FIELD.fullmatch(field) or (required and not field.strip()):
            raise ValueError(f"{name} {field!r} is not an integer")
        return int(field.strip() or 0)

    @staticmethod
    def _parse_implied_decimal(field: str) -> float:
        """'0005352' -> 0.0005352; embedded blanks read as zeros."""
        if not IMPLIED_DECIMAL_FIELD.fullmatch(field):
            raise ValueError(f"eccentricity {field!r} is not a digit field")
        return float("0." + field.strip().replace(" ", "0"))

    @staticmethod
    def _parse_exponential(field: str) -> float:
        """
        Decode TLE implied-decimal exponential notation.

        ' 33452-3' -> 0.33452e-3, '-11606-4' -> -0.11606e-4
        """
        if not EXPONENTIAL_FIELD.fullmatch(field):
            raise ValueError(f"exponential field {field!r} is malformed")
        if not field.strip():
            return 0.0

        sign = -1.0 if field[0] == "-" else 1.0
        mantissa = field[1:6].replace(" ", "0")
        exponent = field[6:8].strip() or "0"

        return sign * float("0." + mantissa) * 10.0 ** int(exponent)


_parser = TLEParser()


def parse_tle(line1: str, line2: str) -> OrbitalElements:
    """Parse a TLE pair. See `TLEParser.parse_tle`."""
    return _parser.parse_tle(line1, line2)
