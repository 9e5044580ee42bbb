"""
Decoys: the public face of an operation target.

A decoy carries the encrypted position that is shown on the shared map, the
derivation steps for the audit log, and the original position, which is only
used to confirm that a key really decrypts the decoy.
"""
import logging
from typing import Iterable, Optional

import config
from models import Coordinate, Decoy, OperationTarget
from obfuscation import decrypt_coordinates, encrypt_coordinates, matches_original

logger = logging.getLogger(f"decoy_cipher.{__name__}")


def create_decoy(target: OperationTarget, key: str, public_name: Optional[str] = None) -> Decoy:
    encrypted = encrypt_coordinates(target.latitude, target.longitude, key)
    return Decoy(
        public_name=public_name or target.name or f"Decoy {target.id}",
        operation_target_id=target.id,
        latitude=encrypted.latitude,
        longitude=encrypted.longitude,
        derivation_steps=encrypted.derivation_steps,
        original_latitude=target.latitude,
        original_longitude=target.longitude,
    )


def create_decoys(targets: Iterable[OperationTarget], key: str) -> list[Decoy]:
    """Encrypts every target with the same key."""
    decoys = [create_decoy(target, key) for target in targets]
    logger.info(f"Created {len(decoys)} decoys")
    return decoys


def reveal_decoy(decoy: Decoy, key: str, tolerance: float = config.VERIFY_TOLERANCE) -> Optional[Coordinate]:
    """
    Decrypts a decoy and returns the true position, or None when the result
    does not land on the stored original (wrong key).
    """
    decrypted = decrypt_coordinates(decoy.latitude, decoy.longitude, key)
    original = Coordinate(latitude=decoy.original_latitude, longitude=decoy.original_longitude)
    if not matches_original(decrypted, original, tolerance):
        logger.info(f"Decoy reveal rejected for target {decoy.operation_target_id}")
        return None
    return decrypted
