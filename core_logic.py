import os
import logging
from logging.handlers import RotatingFileHandler

from fastapi import HTTPException, status

import config

# --- LOGGING SETUP ---

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def setup_logging() -> logging.Logger:
    """Configure structured logging with rotation"""
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logger = logging.getLogger("decoy_cipher")
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)

        os.makedirs(config.LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(config.LOG_DIR, "app.log"),
            maxBytes=10_485_760,
            backupCount=5
        )
        file_handler.setLevel(level)

        formatter = logging.Formatter(LOG_FORMAT)
        console_handler.setFormatter(formatter)
        file_handler.setFormatter(formatter)

        logger.addHandler(console_handler)
        logger.addHandler(file_handler)

    return logger

logger = setup_logging()

# --- CUSTOM EXCEPTIONS ---

class ValidationException(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class DecryptionRejected(HTTPException):
    def __init__(self, detail: str = "Key is incorrect or decryption failed"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
