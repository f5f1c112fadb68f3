# src/id_generator.py
"""
Typed Public ID Generator
Generates IDs in format: PREFIX-TIMESTAMP-RANDOM
Example: USR-1699564234-A7K9M2
"""

import re
import secrets
import string
import time


# Prefix mapping for all resource types
PREFIX_MAP = {
    "user": "USR",
    "post": "PST",
    "notification": "NTF",
    "image": "IMG",
}

_RANDOM_ALPHABET = string.ascii_uppercase + string.digits
_PUBLIC_ID_RE = re.compile(r"^([A-Z]{3})-(\d{10,})-([A-Z0-9]{6})$")


def generate_public_id(prefix: str) -> str:
    """
    Generate a typed public ID with format: PREFIX-TIMESTAMP-RANDOM

    Args:
        prefix: 3-letter type prefix (e.g., "USR", "PST") or resource type name (e.g., "user", "post")

    Returns:
        str: Public ID in format PREFIX-TIMESTAMP-RANDOM
        Example: "USR-1699564234-A7K9M2"

    Security notes:
        - Timestamp provides chronological sortability
        - Random component prevents enumeration attacks
    """
    # If prefix is a resource type name, look it up in PREFIX_MAP
    if prefix in PREFIX_MAP:
        prefix = PREFIX_MAP[prefix]

    timestamp = int(time.time())
    random_part = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(6))

    return f"{prefix}-{timestamp}-{random_part}"


def validate_public_id(public_id: str, expected_prefix: str = None) -> bool:
    """
    Check that ``public_id`` is well formed, optionally with a given prefix.

    >>> validate_public_id("USR-1699564234-A7K9M2", "USR")
    True
    >>> validate_public_id("PST-1699564234-A7K9M2", "USR")
    False
    """
    if not public_id:
        return False
    match = _PUBLIC_ID_RE.match(public_id)
    if not match:
        return False
    if expected_prefix is not None:
        expected_prefix = PREFIX_MAP.get(expected_prefix, expected_prefix)
        return match.group(1) == expected_prefix
    return True
