"""
Seed derivation and the deterministic generator behind every keyed stage.

Seeds must match the values produced by the browser client that wrote the
existing decoys, so the hash runs over UTF-16 code units with explicit
32-bit signed wraparound.
"""

# Multiplier and modulus of the Park-Miller minimal standard generator.
LCG_MULTIPLIER = 48271
LCG_MODULUS = 2**31 - 1

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _to_int32(n: int) -> int:
    n &= _INT32_MASK
    return n - 0x100000000 if n & _INT32_SIGN else n


def _utf16_code_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def derive_seed(text: str) -> int:
    """
    Turns an arbitrary string into a non-negative integer seed.
    hash = hash * 31 + code, wrapped to a signed 32-bit integer after every step.
    """
    h = 0
    for code in _utf16_code_units(text):
        h = _to_int32((h << 5) - h + code)
    return abs(h)


def derive_stage_seed(pipeline_seed: int, stage_index: int) -> int:
    """Derives the seed of one pipeline position from the key's seed."""
    return derive_seed(f"{pipeline_seed}{stage_index}")


class LinearCongruentialGenerator:
    """Reproducible source of values in (0, 1). Build a fresh one per stage call."""

    def __init__(self, seed: int):
        self.state = seed

    def next(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER) % LCG_MODULUS
        return self.state / LCG_MODULUS

    def choice(self, items):
        """Picks an item the way the client does: floor(next() * len)."""
        return items[int(self.next() * len(items))]
