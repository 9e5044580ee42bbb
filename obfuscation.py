"""
Keyed, reversible obfuscation of map coordinates.

Five independent stages run in a fixed order. Each one is seeded from the key
and its own position in the pipeline, so decryption walks the same stages
backwards with the same seeds. It is arithmetic, not strong encryption: the
point is that a decoy stored in a shared database says nothing about the true
position without the key.
"""
import logging
import math
from typing import NamedTuple

import config
from models import Coordinate, DerivationStep, EncryptedCoordinates
from seeding import LinearCongruentialGenerator, derive_seed, derive_stage_seed

logger = logging.getLogger(f"decoy_cipher.{__name__}")


class StageOutput(NamedTuple):
    latitude: float
    longitude: float
    details: str


class Stage:
    """One keyed transform. `inverse` undoes `forward` for the same seed."""
    name: str = ""

    def forward(self, lat: float, lng: float, seed: int) -> StageOutput:
        raise NotImplementedError

    def inverse(self, lat: float, lng: float, seed: int) -> tuple[float, float]:
        raise NotImplementedError


# --- STAGE 1: COLLATZ DIFFUSION ---

COLLATZ_ITERATIONS = 5


def _collatz_history(n: int) -> list[int]:
    history = [n]
    for _ in range(COLLATZ_ITERATIONS):
        n = n // 2 if n % 2 == 0 else n * 3 + 1
        history.append(n)
    return history


def _collatz_offset(value: float) -> float:
    if not math.isfinite(value):
        return math.nan
    return (sum(_collatz_history(math.floor(abs(value)))) % 10000) / 100000


class CollatzDiffusion(Stage):
    """
    Offsets each axis by a value derived from the Collatz walk of its integer part.
    Does not draw from the generator. The inverse recomputes the offsets from
    its own input, so it only undoes `forward` when the forward offset did not
    move the integer part across a boundary.
    """
    name = "Collatz Diffusion"

    def forward(self, lat, lng, seed):
        lat_int = math.floor(abs(lat)) if math.isfinite(lat) else lat
        lng_int = math.floor(abs(lng)) if math.isfinite(lng) else lng
        lat_offset = _collatz_offset(lat)
        lng_offset = _collatz_offset(lng)
        new_lat = lat + lat_offset
        new_lng = lng - lng_offset

        lines = [f"Input: ({lat:.6f}, {lng:.6f})", f"Integer Parts: X={lat_int}, Y={lng_int}", ""]
        if math.isfinite(lat) and math.isfinite(lng):
            xs, ys = _collatz_history(lat_int), _collatz_history(lng_int)
            for i in range(COLLATZ_ITERATIONS):
                lines.append(f"Step {i + 1}:")
                for axis, history in (("X", xs), ("Y", ys)):
                    before, after = history[i], history[i + 1]
                    if before % 2 == 0:
                        lines.append(f"  {axis}: {before} (even) -> {before} / 2 = {after}")
                    else:
                        lines.append(f"  {axis}: {before} (odd) -> (3 * {before}) + 1 = {after}")
                lines.append("")
        lines += [
            "Resulting Offsets:",
            f"  Lat Offset: ΣX % 10000 / 100000 = {lat_offset:.6f}",
            f"  Lng Offset: ΣY % 10000 / 100000 = {lng_offset:.6f}",
            f"Output: ({new_lat:.6f}, {new_lng:.6f})",
        ]
        return StageOutput(new_lat, new_lng, "\n".join(lines))

    def inverse(self, lat, lng, seed):
        return lat - _collatz_offset(lat), lng + _collatz_offset(lng)


# --- STAGE 2: PRIME JUMP ---

PRIMES = (17, 31, 53, 71, 97)


class PrimeJump(Stage):
    name = "Prime Jump"

    @staticmethod
    def _offset(seed: int) -> tuple[int, int, float]:
        rng = LinearCongruentialGenerator(seed)
        p1 = rng.choice(PRIMES)
        p2 = rng.choice(PRIMES)
        return p1, p2, (p1 * p2) / 100000

    def forward(self, lat, lng, seed):
        p1, p2, offset = self._offset(seed)
        new_lat = lat - offset
        new_lng = lng + offset
        details = (
            f"Input: ({lat:.6f}, {lng:.6f})\n"
            f"Chosen Primes: p1={p1}, p2={p2}\n"
            f"Offset Calculation: (p1 * p2) / 100000 = {offset:.6f}\n"
            f"New Lat: lat - offset = {lat:.6f} - {offset:.6f} = {new_lat:.6f}\n"
            f"New Lng: lng + offset = {lng:.6f} + {offset:.6f} = {new_lng:.6f}"
        )
        return StageOutput(new_lat, new_lng, details)

    def inverse(self, lat, lng, seed):
        _, _, offset = self._offset(seed)
        return lat + offset, lng - offset


# --- STAGE 3: FIBONACCI SPIRAL ---

GOLDEN_ANGLE = 137.5 * (math.pi / 180)


class FibonacciSpiral(Stage):
    name = "Fibonacci Spiral"

    @staticmethod
    def _offsets(seed: int) -> tuple[float, float, float, float]:
        rng = LinearCongruentialGenerator(seed)
        distance = rng.next() * 0.02
        # The angle multiplies the golden angle as a plain number; it is never converted itself.
        angle = rng.next() * 360
        return (
            distance,
            angle,
            distance * math.cos(angle * GOLDEN_ANGLE),
            distance * math.sin(angle * GOLDEN_ANGLE),
        )

    def forward(self, lat, lng, seed):
        distance, angle, lat_offset, lng_offset = self._offsets(seed)
        new_lat = lat + lat_offset
        new_lng = lng + lng_offset
        details = (
            f"Input: ({lat:.6f}, {lng:.6f})\n"
            f"Golden Angle: {GOLDEN_ANGLE:.4f} rad\n"
            f"Distance (d): {distance:.4f}, Angle (a): {angle:.4f}\n"
            f"Lat Offset: d * cos(a * GA) = {lat_offset:.6f}\n"
            f"Lng Offset: d * sin(a * GA) = {lng_offset:.6f}\n"
            f"Output: ({new_lat:.6f}, {new_lng:.6f})"
        )
        return StageOutput(new_lat, new_lng, details)

    def inverse(self, lat, lng, seed):
        _, _, lat_offset, lng_offset = self._offsets(seed)
        return lat - lat_offset, lng - lng_offset


# --- STAGE 4: AFFINE TRANSFORMATION ---

class AffineTransformation(Stage):
    name = "Affine Transformation"

    @staticmethod
    def _coefficients(seed: int) -> tuple[float, float, float, float]:
        rng = LinearCongruentialGenerator(seed)
        a1 = 1 + (rng.next() - 0.5) * 0.2
        b1 = (rng.next() - 0.5) * 0.1
        a2 = 1 + (rng.next() - 0.5) * 0.2
        b2 = (rng.next() - 0.5) * 0.1
        return a1, b1, a2, b2

    def forward(self, lat, lng, seed):
        a1, b1, a2, b2 = self._coefficients(seed)
        new_lat = a1 * lat + b1
        new_lng = a2 * lng + b2
        details = (
            f"Input: ({lat:.6f}, {lng:.6f})\n"
            "Formulas:\n  new_lat = (lat * a1) + b1\n  new_lng = (lng * a2) + b2\n\n"
            f"Variables:\n  a1={a1:.4f}, b1={b1:.4f}\n  a2={a2:.4f}, b2={b2:.4f}\n\n"
            "Forward Calculation:\n"
            f"  new_lat = ({lat:.6f} * {a1:.4f}) + {b1:.4f} = {new_lat:.6f}\n"
            f"  new_lng = ({lng:.6f} * {a2:.4f}) + {b2:.4f} = {new_lng:.6f}"
        )
        return StageOutput(new_lat, new_lng, details)

    def inverse(self, lat, lng, seed):
        a1, b1, a2, b2 = self._coefficients(seed)
        return (lat - b1) / a1, (lng - b2) / a2


# --- STAGE 5: LOGARITHMIC SPIRAL ---

class LogarithmicSpiral(Stage):
    name = "Logarithmic Spiral"

    @staticmethod
    def _parameters(seed: int) -> tuple[float, float, float, float]:
        rng = LinearCongruentialGenerator(seed)
        a = 0.01 + rng.next() * 0.01
        b = 0.1 + rng.next() * 0.1
        theta = (rng.next() * 2 - 1) * math.pi
        return a, b, theta, a * math.exp(b * theta)

    def forward(self, lat, lng, seed):
        a, b, theta, r = self._parameters(seed)
        lat_offset = r * math.cos(theta)
        lng_offset = r * math.sin(theta)
        new_lat = lat + lat_offset
        new_lng = lng + lng_offset
        details = (
            f"Input: ({lat:.6f}, {lng:.6f})\n"
            "Formulas:\n  r = a * e^(b * θ)\n  lat_offset = r * cos(θ)\n  lng_offset = r * sin(θ)\n\n"
            f"Variables:\n  a={a:.4f}, b={b:.4f}, θ={theta:.4f}\n\n"
            "Calculation:\n"
            f"  r = {a:.4f} * e^({b:.4f} * {theta:.4f}) = {r:.6f}\n"
            f"  lat_offset = {r:.6f} * cos({theta:.4f}) = {lat_offset:.6f}\n"
            f"  lng_offset = {r:.6f} * sin({theta:.4f}) = {lng_offset:.6f}\n"
            f"Output: ({new_lat:.6f}, {new_lng:.6f})"
        )
        return StageOutput(new_lat, new_lng, details)

    def inverse(self, lat, lng, seed):
        _, _, theta, r = self._parameters(seed)
        return lat - r * math.cos(theta), lng - r * math.sin(theta)


# Pipeline order. A stage's index here is part of its seed.
STAGES: tuple[Stage, ...] = (
    CollatzDiffusion(),
    PrimeJump(),
    FibonacciSpiral(),
    AffineTransformation(),
    LogarithmicSpiral(),
)


# --- PIPELINE ---

def encrypt_coordinates(lat: float, lng: float, key: str) -> EncryptedCoordinates:
    """Runs a coordinate forward through every stage and records each step."""
    pipeline_seed = derive_seed(key)
    steps = []
    for index, stage in enumerate(STAGES):
        lat, lng, details = stage.forward(lat, lng, derive_stage_seed(pipeline_seed, index))
        steps.append(DerivationStep(name=stage.name, latitude=lat, longitude=lng, details=details))

    logger.debug(f"Coordinate encrypted through {len(steps)} stages")
    return EncryptedCoordinates(latitude=lat, longitude=lng, derivation_steps=tuple(steps))


def decrypt_coordinates(lat: float, lng: float, key: str) -> Coordinate:
    """Undoes `encrypt_coordinates`. A wrong key still yields a coordinate, just the wrong one."""
    pipeline_seed = derive_seed(key)
    for index in reversed(range(len(STAGES))):
        lat, lng = STAGES[index].inverse(lat, lng, derive_stage_seed(pipeline_seed, index))

    logger.debug("Coordinate decrypted")
    return Coordinate(latitude=lat, longitude=lng)


def matches_original(decrypted: Coordinate, original: Coordinate, tolerance: float = config.VERIFY_TOLERANCE) -> bool:
    """True when both axes are strictly within `tolerance` of the known original."""
    return (
        abs(decrypted.latitude - original.latitude) < tolerance
        and abs(decrypted.longitude - original.longitude) < tolerance
    )
