from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

import config

# --- Request field types ---

Key = Annotated[str, Field(min_length=1, max_length=config.MAX_KEY_LENGTH)]
PlainValue = Annotated[float, Field(allow_inf_nan=False, ge=-config.MAX_COORDINATE_MAGNITUDE, le=config.MAX_COORDINATE_MAGNITUDE)]
DecoyValue = Annotated[float, Field(allow_inf_nan=False, ge=-config.MAX_DECOY_MAGNITUDE, le=config.MAX_DECOY_MAGNITUDE)]

# --- Pipeline values ---

class Coordinate(BaseModel):
    """A (latitude, longitude) pair. Percent-of-map values and degrees are both fine."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class DerivationStep(BaseModel):
    """Audit record of one stage's forward output."""
    model_config = ConfigDict(frozen=True)

    name: str
    latitude: float
    longitude: float
    details: str


class EncryptedCoordinates(BaseModel):
    """Final decoy coordinate plus the five derivation steps, in stage order."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    derivation_steps: tuple[DerivationStep, ...]


class OperationTarget(BaseModel):
    """A true position that should only ever be shown publicly as a decoy."""
    id: str = Field(..., min_length=1, max_length=100)
    name: Optional[str] = Field(None, max_length=200)
    latitude: PlainValue
    longitude: PlainValue


class Decoy(BaseModel):
    """Public stand-in for an operation target, revealable only with the key."""
    model_config = ConfigDict(frozen=True)

    public_name: str
    operation_target_id: str
    latitude: float
    longitude: float
    derivation_steps: tuple[DerivationStep, ...]
    original_latitude: float
    original_longitude: float


# --- Request payloads ---

class EncryptPayload(BaseModel):
    """Request model for encrypting one coordinate."""
    latitude: PlainValue
    longitude: PlainValue
    key: Key


class DecryptPayload(BaseModel):
    """Request model for decrypting one decoy coordinate."""
    latitude: DecoyValue
    longitude: DecoyValue
    key: Key


class VerifyPayload(DecryptPayload):
    """Request model for checking a key against a known original coordinate."""
    original_latitude: PlainValue
    original_longitude: PlainValue


class DecoyBatchPayload(BaseModel):
    """Request model for turning every target on a map into decoys."""
    key: Key
    targets: list[OperationTarget] = Field(..., min_length=1, max_length=config.MAX_BATCH_SIZE)


class RevealPayload(BaseModel):
    key: Key
    decoy: Decoy


class MessagePayload(BaseModel):
    """Request model for encrypting a message."""
    text: str = Field(..., max_length=config.MAX_MESSAGE_LENGTH)

    @field_validator('text')
    @classmethod
    def validate_char_range(cls, v):
        if any(ord(ch) > config.MAX_CHAR_CODE for ch in v):
            raise ValueError("Message may only contain characters with codes 0-255")
        return v


class CiphertextPayload(BaseModel):
    encrypted_text: str = Field(..., max_length=config.MAX_MESSAGE_LENGTH * 8)


# --- Responses ---

class VerifyResponse(BaseModel):
    valid: bool
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class DecoyBatchResponse(BaseModel):
    decoys: list[Decoy]
    count: int


class EncryptedMessageResponse(BaseModel):
    encrypted_text: str


class MessageResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    error: str
