"""
Configuration settings for the search URL classifier
"""
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / '.env')

# Logging Configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_DIR = Path(os.getenv('LOG_DIR', str(BASE_DIR / 'logs')))
LOG_RETENTION_DAYS = int(os.getenv('LOG_RETENTION_DAYS', 14))
LOG_MAX_BYTES = int(os.getenv('LOG_MAX_BYTES', 20 * 1024 * 1024))
LOG_BACKUP_COUNT = int(os.getenv('LOG_BACKUP_COUNT', 5))

# Output
OUTPUT_DIR = Path(os.getenv('OUTPUT_DIR', str(BASE_DIR / 'data' / 'processed')))

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


# Validation
def validate_config():
    """Validate that all configuration values are usable"""
    errors = []

    if LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)} (got {LOG_LEVEL!r})")

    if LOG_RETENTION_DAYS < 0:
        errors.append("LOG_RETENTION_DAYS must be >= 0")

    if LOG_MAX_BYTES <= 0:
        errors.append("LOG_MAX_BYTES must be > 0")

    if errors:
        raise ValueError("Configuration errors:\n" + "\n".join(f"- {e}" for e in errors))

    return True


if __name__ == '__main__':
    try:
        validate_config()
        print("✓ Configuration is valid")
        print(f"✓ Log level: {LOG_LEVEL} ({logging.getLevelName(LOG_LEVEL.upper())})")
        print(f"✓ Log directory: {LOG_DIR}")
        print(f"✓ Output directory: {OUTPUT_DIR}")
    except ValueError as e:
        print(f"✗ {e}")
