"""
Config: environment-driven settings for the profit story.

Configure in .env (all optional):
  SUPERSTORE_DATA_PATH = /path/to/superstore.csv   (default: <project_root>/data/superstore.csv)
  STORY_LOG_LEVEL      = INFO
  STORY_LOG_DIR        = logs                      (unset: console logging only)
  STORY_CHART_WIDTH    = 960
  STORY_CHART_HEIGHT   = 600
"""
import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# ── Paths ─────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_DATA_PATH = DATA_DIR / "superstore.csv"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring {}={!r}: not an integer, using {}", name, raw, default)
        return default


def data_path() -> Path:
    """Location of the sales file, honouring SUPERSTORE_DATA_PATH."""
    override = os.environ.get("SUPERSTORE_DATA_PATH", "").strip()
    return Path(override) if override else DEFAULT_DATA_PATH


def log_level() -> str:
    return os.environ.get("STORY_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def log_dir() -> Path | None:
    raw = os.environ.get("STORY_LOG_DIR", "").strip()
    return Path(raw) if raw else None


def chart_size() -> tuple[int, int]:
    """(width, height) in pixels for every scene figure."""
    return _env_int("STORY_CHART_WIDTH", 960), _env_int("STORY_CHART_HEIGHT", 600)
