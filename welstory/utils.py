"""Identifier helpers."""

import logging
import random
import uuid

logger = logging.getLogger(__name__)

UUID4_TEMPLATE = "xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx"


def _weak_uuid4() -> str:
    """Version-4 formatted id from the non-cryptographic PRNG."""
    chars = []
    for c in UUID4_TEMPLATE:
        if c == "x":
            chars.append(format(random.getrandbits(4), "x"))
        elif c == "y":
            # variant bits 10xx
            chars.append(format(random.getrandbits(2) | 0x8, "x"))
        else:
            chars.append(c)
    return "".join(chars)


def generate_id() -> str:
    """
    Generate a random UUID v4 string for use as a device id.

    Uses the OS random source when it exists, otherwise falls back to
    the ``random`` module.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        logger.warning("OS random source unavailable, using weak device id")
        return _weak_uuid4()
