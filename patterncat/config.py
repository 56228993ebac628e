import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

# Catalog root defaults to the working directory
CATALOG_ROOT = Path(os.getenv("PATTERNCAT_ROOT") or Path.cwd())
INDEX_FILE = os.getenv("PATTERNCAT_INDEX_FILE", "README.md")
PATTERNS_DIR = os.getenv("PATTERNCAT_PATTERNS_DIR", "patterns")
ENTRY_FILE = "README.md"
STRICT_MODE = os.getenv("PATTERNCAT_STRICT", "false").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("PATTERNCAT_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
