"""Quiz-related constants shared across core and server layers."""

from pathlib import Path

ATTEMPT_STORAGE_KEY: str = "quiz_attempts"
MAX_STORED_ATTEMPTS: int = 200
HISTORY_DISPLAY_LIMIT: int = 10
DEFAULT_DATA_DIR: Path = Path.home() / ".pm_quiz"
TOPICS_DIR: Path = Path(__file__).resolve().parent.parent / "data"
TOPIC_FILE_PATTERN: str = "*.txt"
