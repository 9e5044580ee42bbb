"""
Positional affine cipher for short messages.

Each character code x at position i becomes ((7x + 13) mod 256) + i^2. The
result is stored as a JSON integer array, so it can sit in a plain text field.
"""
import json
import logging

import config

logger = logging.getLogger(f"decoy_cipher.{__name__}")

MULTIPLIER = 7
INCREMENT = 13
MODULUS = 256
# pow(7, -1, 256)
MULTIPLIER_INVERSE = 183


def encrypt_message(text: str) -> str:
    """Encrypts text whose character codes are in 0-255 into a JSON integer array."""
    encrypted = [((MULTIPLIER * ord(ch) + INCREMENT) % MODULUS) + i * i for i, ch in enumerate(text)]
    # Compact separators match the stored format: [212,220]
    return json.dumps(encrypted, separators=(",", ":"))


def _is_whole_number(value) -> bool:
    # Older stored arrays may hold numbers like 212.0.
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _decrypt_value(x3: int, position: int) -> str:
    x2 = x3 - position * position
    return chr((MULTIPLIER_INVERSE * (x2 - INCREMENT)) % MODULUS)


def decrypt_message(encrypted_text: str) -> str:
    """
    Reverses `encrypt_message`.
    Returns a sentinel string instead of raising when the input is malformed.
    """
    try:
        values = json.loads(encrypted_text)
    except (TypeError, ValueError) as e:
        logger.warning(f"Message decryption failed: {e}")
        return config.DECRYPTION_ERROR_SENTINEL

    if not isinstance(values, list):
        return config.FORMAT_ERROR_SENTINEL

    if not all(_is_whole_number(v) for v in values):
        logger.warning("Message decryption failed: array holds non-integer values")
        return config.DECRYPTION_ERROR_SENTINEL

    return "".join(_decrypt_value(int(x3), i) for i, x3 in enumerate(values))
