import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

import config
from core_logic import ValidationException, DecryptionRejected
from decoys import create_decoys, reveal_decoy
from limiter import limiter
from message_cipher import decrypt_message, encrypt_message
from models import (
    Coordinate, EncryptPayload, DecryptPayload, VerifyPayload, EncryptedCoordinates,
    DecoyBatchPayload, DecoyBatchResponse, RevealPayload, VerifyResponse,
    MessagePayload, CiphertextPayload, EncryptedMessageResponse, MessageResponse,
    ErrorResponse,
)
from obfuscation import decrypt_coordinates, encrypt_coordinates, matches_original

# --- Router Setup ---

api_router = APIRouter(
    prefix="/api/v1",
    tags=["Cipher"],
)

monitoring_router = APIRouter(
    tags=["Monitoring"],
)

logger = logging.getLogger(f"decoy_cipher.{__name__}")

# Known-good inputs for the health check.
HEALTH_CHECK_KEY = "health-check"
HEALTH_CHECK_COORDINATE = Coordinate(latitude=40.5, longitude=49.5)
HEALTH_CHECK_MESSAGE = "AB"

# --- Monitoring ---

@monitoring_router.get("/health", summary="Health Check")
async def health_check():
    """Round-trips a sample coordinate and message through both ciphers."""
    health_status = {"status": "ok", "services": {}, "timestamp": datetime.now(timezone.utc).isoformat()}
    status_code = 200

    sample = HEALTH_CHECK_COORDINATE
    encrypted = encrypt_coordinates(sample.latitude, sample.longitude, HEALTH_CHECK_KEY)
    decrypted = decrypt_coordinates(encrypted.latitude, encrypted.longitude, HEALTH_CHECK_KEY)
    if matches_original(decrypted, sample) and len(encrypted.derivation_steps) == config.STAGE_COUNT:
        health_status["services"]["coordinate_pipeline"] = "ok"
    else:
        logger.error("Health check failed: coordinate pipeline round-trip mismatch")
        health_status["services"]["coordinate_pipeline"] = "error"
        health_status["status"] = "error"
        status_code = 503

    if decrypt_message(encrypt_message(HEALTH_CHECK_MESSAGE)) == HEALTH_CHECK_MESSAGE:
        health_status["services"]["message_cipher"] = "ok"
    else:
        logger.error("Health check failed: message cipher round-trip mismatch")
        health_status["services"]["message_cipher"] = "error"
        health_status["status"] = "error"
        status_code = 503

    return JSONResponse(content=health_status, status_code=status_code)

# --- Coordinates ---

@api_router.post(
    "/coordinates/encrypt",
    response_model=EncryptedCoordinates,
    summary="Encrypt a coordinate into a decoy position",
)
@limiter.limit(config.RATE_LIMIT_ENCRYPT)
async def encrypt_coordinate(payload: EncryptPayload, request: Request):
    """Returns the decoy position and the five derivation steps."""
    return encrypt_coordinates(payload.latitude, payload.longitude, payload.key)


@api_router.post(
    "/coordinates/decrypt",
    response_model=Coordinate,
    summary="Decrypt a decoy position",
)
@limiter.limit(config.RATE_LIMIT_DECRYPT)
async def decrypt_coordinate(payload: DecryptPayload, request: Request):
    """
    Always answers with a coordinate. Whether the key was right is up to the
    caller to judge against a known original (see /coordinates/verify).
    """
    return decrypt_coordinates(payload.latitude, payload.longitude, payload.key)


@api_router.post(
    "/coordinates/verify",
    response_model=VerifyResponse,
    summary="Check a key against a known original coordinate",
)
@limiter.limit(config.RATE_LIMIT_DECRYPT)
async def verify_coordinate(payload: VerifyPayload, request: Request):
    decrypted = decrypt_coordinates(payload.latitude, payload.longitude, payload.key)
    original = Coordinate(latitude=payload.original_latitude, longitude=payload.original_longitude)
    if not matches_original(decrypted, original):
        return VerifyResponse(valid=False)
    return VerifyResponse(valid=True, latitude=decrypted.latitude, longitude=decrypted.longitude)

# --- Decoys ---

@api_router.post(
    "/decoys",
    response_model=DecoyBatchResponse,
    status_code=201,
    summary="Create decoys for a batch of operation targets",
    responses={400: {"model": ErrorResponse, "description": "Bad Request: duplicate target ids."}},
)
@limiter.limit(config.RATE_LIMIT_ENCRYPT)
async def create_decoy_batch(payload: DecoyBatchPayload, request: Request):
    target_ids = [t.id for t in payload.targets]
    if len(set(target_ids)) != len(target_ids):
        raise ValidationException("Target ids must be unique within a batch")

    decoys = create_decoys(payload.targets, payload.key)
    return DecoyBatchResponse(decoys=decoys, count=len(decoys))


@api_router.post(
    "/decoys/reveal",
    response_model=Coordinate,
    summary="Reveal the true position behind a decoy",
    responses={403: {"model": ErrorResponse, "description": "Forbidden: the key does not decrypt this decoy."}},
)
@limiter.limit(config.RATE_LIMIT_DECRYPT)
async def reveal_decoy_position(payload: RevealPayload, request: Request):
    revealed = reveal_decoy(payload.decoy, payload.key)
    if revealed is None:
        raise DecryptionRejected()
    return revealed

# --- Messages ---

@api_router.post(
    "/messages/encrypt",
    response_model=EncryptedMessageResponse,
    summary="Encrypt a message",
)
@limiter.limit(config.RATE_LIMIT_ENCRYPT)
async def encrypt_message_text(payload: MessagePayload, request: Request):
    return EncryptedMessageResponse(encrypted_text=encrypt_message(payload.text))


@api_router.post(
    "/messages/decrypt",
    response_model=MessageResponse,
    summary="Decrypt a message",
)
@limiter.limit(config.RATE_LIMIT_DECRYPT)
async def decrypt_message_text(payload: CiphertextPayload, request: Request):
    """Malformed ciphertext comes back as a sentinel string, not an error status."""
    return MessageResponse(text=decrypt_message(payload.encrypted_text))
