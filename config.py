import os

# ============================================================================
# CONFIGURATION CLASS
# ============================================================================

class Config:
    """Centralized configuration with validation"""
    APP_NAME: str = os.getenv("APP_NAME", "Decoy Cipher")

    # Pipeline
    STAGE_COUNT: int = 5
    VERIFY_TOLERANCE: float = float(os.getenv("VERIFY_TOLERANCE", "1e-4"))

    # Message cipher sentinels (returned, never raised)
    FORMAT_ERROR_SENTINEL: str = "[format error: not an array]"
    DECRYPTION_ERROR_SENTINEL: str = "[decryption error]"
    MAX_CHAR_CODE: int = 255

    # Request limits
    MAX_KEY_LENGTH: int = 256
    # Plain coordinates stay within this bound, decoys made from them within the second.
    MAX_COORDINATE_MAGNITUDE: float = 1e9
    MAX_DECOY_MAGNITUDE: float = 2e9
    MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "4096"))
    MAX_BATCH_SIZE: int = int(os.getenv("MAX_BATCH_SIZE", "500"))

    # Rate limiting
    RATE_LIMIT_ENCRYPT: str = os.getenv("RATE_LIMIT_ENCRYPT", "60/minute")
    RATE_LIMIT_DECRYPT: str = os.getenv("RATE_LIMIT_DECRYPT", "30/minute")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "logs"))

    # CORS
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    @classmethod
    def validate(cls):
        """Validate configuration on startup"""
        if not 0 < cls.VERIFY_TOLERANCE < 1:
            raise ValueError("VERIFY_TOLERANCE must be between 0 and 1")
        if cls.MAX_MESSAGE_LENGTH < 1:
            raise ValueError("MAX_MESSAGE_LENGTH must be positive")
        if cls.MAX_BATCH_SIZE < 1:
            raise ValueError("MAX_BATCH_SIZE must be positive")
        if cls.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {cls.LOG_LEVEL}")

# ============================================================================
# SINGLETON INSTANCE & DERIVED CONSTANTS
# ============================================================================

config = Config()

# --- Expose class attributes as module constants for convenience ---
for attr in [a for a in dir(config) if not a.startswith('__') and not callable(getattr(config, a))]:
    globals()[attr] = getattr(config, attr)
