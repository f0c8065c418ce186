"""
MAC address validation and formatting for Ecowitt device addressing.
"""

import re

_SEPARATORS = re.compile(r"[:\-\s]")
_DOUBLED_SEPARATORS = re.compile(r"[:\-\s]{2,}")
_GROUPED = re.compile(r"^[0-9A-Fa-f]{2}([:\- ])[0-9A-Fa-f]{2}(?:\1[0-9A-Fa-f]{2}){4}$")
_COMPACT = re.compile(r"^[0-9A-F]{12}$")


def _clean(mac: str) -> str:
    return _SEPARATORS.sub("", mac).upper()


def is_valid_mac_address(mac) -> bool:
    """True for 12 hex digits, bare or paired with one consistent separator."""
    if not mac or not isinstance(mac, str):
        return False
    if _DOUBLED_SEPARATORS.search(mac):
        return False
    if len(mac) == 12:
        return bool(_COMPACT.match(mac.upper()))
    return bool(_GROUPED.match(mac))


def _validate(mac) -> str:
    if not mac or not isinstance(mac, str):
        raise ValueError("MAC address must be a non-empty string")
    clean = _clean(mac)
    if not _COMPACT.match(clean):
        raise ValueError("Invalid MAC address format. Expected 12 hexadecimal characters.")
    return clean


def normalize_mac_address(mac) -> str:
    """Strip separators and upper-case; raises ValueError on bad input."""
    return _validate(mac)


def format_mac_address(mac) -> str:
    """AABBCCDDEEFF / aa-bb-... -> AA:BB:CC:DD:EE:FF"""
    clean = _validate(mac)
    return ":".join(clean[i:i + 2] for i in range(0, 12, 2))


def compact_mac_address(mac) -> str:
    """AA:BB:CC:DD:EE:FF -> AABBCCDDEEFF"""
    return _validate(mac)
