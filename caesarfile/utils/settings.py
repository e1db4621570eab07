# caesarfile/utils/settings.py
import logging, os

logger = logging.getLogger(__name__)

def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s=%r must be positive, using %d", name, raw, default)
        return default
    return value

BLOCK_SIZE = env_int("CAESARFILE_BLOCK_SIZE", 64 * 1024)
LOG_LEVEL = os.getenv("CAESARFILE_LOG_LEVEL", "WARNING").upper()

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
STORE_TTL_SEC = env_int("CAESARFILE_STORE_TTL_SEC", 600)  # 10 minutes
MAX_UPLOAD_BYTES = env_int("CAESARFILE_MAX_UPLOAD_BYTES", 50 * 1024 * 1024)

BASE_URL = os.getenv("CAESARFILE_BASE_URL", "http://localhost:8000")
