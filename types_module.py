"""
Types Module

Codecs for the identifiers and enumerated fields of the airline dataset.

All parsers return None for malformed input and never raise; callers
decide whether a bad value rejects a row or a query.

Packed codes:
    - Airport code: three ASCII letters, uppercased, packed big-endian into
      the low 24 bits of an integer, so integer order is alphabetical order
    - Country code: two or three ASCII letters, packed the same way
    - Flight id: decimal digits, 32-bit
    - Reservation id: "Book" + decimal digits, 32-bit
    - Hotel id: "HTL" + decimal digits, 32-bit
"""

from enum import Enum
from typing import Optional

# Constants
UINT32_MAX = 0xFFFFFFFF
RESERVATION_ID_PREFIX = "Book"
HOTEL_ID_PREFIX = "HTL"
AIRPORT_CODE_LENGTH = 3


class AccountStatus(Enum):
    """User account status."""
    INACTIVE = "inactive"
    ACTIVE = "active"


class Sex(Enum):
    """User sex, as written in the dataset."""
    MALE = "M"
    FEMALE = "F"


class IncludesBreakfast(Enum):
    """Breakfast flag of a reservation; NONE is an empty field."""
    NONE = ""
    YES = "yes"
    NO = "no"


def parse_uint32(text: str) -> Optional[int]:
    """
    Parse an unsigned decimal integer that fits in 32 bits.

    Only ASCII digits are accepted: no sign, no spaces, no underscores.
    """
    if not text or any(c < '0' or c > '9' for c in text):
        return None
    value = int(text)
    if value > UINT32_MAX:
        return None
    return value


def _pack_letters(text: str, min_length: int, max_length: int) -> Optional[int]:
    if len(text) < min_length or len(text) > max_length:
        return None
    code = 0
    for c in text:
        if not ('A' <= c <= 'Z' or 'a' <= c <= 'z'):
            return None
        code = (code << 8) | ord(c.upper())
    return code


def _unpack_letters(code: int) -> str:
    letters = []
    while code:
        letters.append(chr(code & 0xFF))
        code >>= 8
    return ''.join(reversed(letters))


def airport_code_from_string(text: str) -> Optional[int]:
    """Parse a three-letter airport code (any case)."""
    return _pack_letters(text, AIRPORT_CODE_LENGTH, AIRPORT_CODE_LENGTH)


def airport_code_to_string(code: int) -> str:
    return _unpack_letters(code)


def country_code_from_string(text: str) -> Optional[int]:
    """Parse a two or three letter country code (any case)."""
    return _pack_letters(text, 2, 3)


def country_code_to_string(code: int) -> str:
    return _unpack_letters(code)


def flight_id_from_string(text: str) -> Optional[int]:
    return parse_uint32(text)


def flight_id_to_string(flight_id: int) -> str:
    return "%010d" % flight_id


def reservation_id_from_string(text: str) -> Optional[int]:
    if not text.startswith(RESERVATION_ID_PREFIX):
        return None
    return parse_uint32(text[len(RESERVATION_ID_PREFIX):])


def reservation_id_to_string(reservation_id: int) -> str:
    return "%s%010d" % (RESERVATION_ID_PREFIX, reservation_id)


def hotel_id_from_string(text: str) -> Optional[int]:
    if not text.startswith(HOTEL_ID_PREFIX):
        return None
    return parse_uint32(text[len(HOTEL_ID_PREFIX):])


def hotel_id_to_string(hotel_id: int) -> str:
    return "%s%d" % (HOTEL_ID_PREFIX, hotel_id)


def account_status_from_string(text: str) -> Optional[AccountStatus]:
    """Parse an account status, ignoring case."""
    lowered = text.lower()
    for status in AccountStatus:
        if status.value == lowered:
            return status
    return None


def sex_from_string(text: str) -> Optional[Sex]:
    for sex in Sex:
        if sex.value == text:
            return sex
    return None


def includes_breakfast_from_string(text: str) -> Optional[IncludesBreakfast]:
    """
    Parse the includes-breakfast field.

    Empty means no information. "t", "true" and "1" mean yes; "f", "false"
    and "0" mean no. Case is ignored.
    """
    lowered = text.lower()
    if lowered == "":
        return IncludesBreakfast.NONE
    if lowered in ("t", "true", "1"):
        return IncludesBreakfast.YES
    if lowered in ("f", "false", "0"):
        return IncludesBreakfast.NO
    return None


def includes_breakfast_to_string(value: IncludesBreakfast) -> str:
    return "True" if value == IncludesBreakfast.YES else "False"


def email_is_valid(text: str) -> bool:
    """
    Check an e-mail address of the form user@domain.tld.

    The user and domain parts must be non-empty and the top-level domain
    must have at least two characters.
    """
    parts = text.split('@')
    if len(parts) != 2 or not parts[0]:
        return False

    domain_parts = parts[1].split('.')
    if len(domain_parts) != 2:
        return False
    domain, tld = domain_parts
    return bool(domain) and len(tld) >= 2
