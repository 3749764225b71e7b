"""Application-level constants."""

from pathlib import Path

# Output directory structure
LOG_DIR = Path("logs")
LOG_FILENAME = "service.log"
