import json
import logging
import os
from pathlib import Path
from pydantic import BaseModel, ValidationError
from datetime import datetime

logger = logging.getLogger(__name__)

# Config directory: PLANNER_DATA_DIR if set (e.g. /data in Docker),
# otherwise ~/.config/planner for local use
_data_dir = os.environ.get("PLANNER_DATA_DIR")
CONFIG_DIR = Path(_data_dir) / "config" if _data_dir else Path.home() / ".config" / "planner"
RECENT_BOOKS_FILE = CONFIG_DIR / "recent.json"
SETTINGS_FILE = CONFIG_DIR / "settings.json"

MAX_RECENT_BOOKS = 10


class RecentBook(BaseModel):
    """A recently opened book."""
    path: str
    name: str
    last_opened: datetime


class ProjectionSettings(BaseModel):
    """User-level projection defaults."""
    max_horizon_months: int = 600
    default_horizon_months: int = 120


def ensure_config_dir() -> None:
    """Ensure the config directory exists."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def load_recent_books() -> list[RecentBook]:
    """Load the list of recently opened books."""
    ensure_config_dir()
    if not RECENT_BOOKS_FILE.exists():
        return []

    try:
        with open(RECENT_BOOKS_FILE, "r") as f:
            data = json.load(f)
            return [RecentBook(**item) for item in data]
    except (json.JSONDecodeError, KeyError, TypeError, ValidationError):
        logger.warning("Ignoring unreadable recent books file %s", RECENT_BOOKS_FILE)
        return []


def save_recent_books(books: list[RecentBook]) -> None:
    """Save the list of recently opened books."""
    ensure_config_dir()
    with open(RECENT_BOOKS_FILE, "w") as f:
        json.dump([book.model_dump(mode="json") for book in books], f, indent=2, default=str)


def add_recent_book(path: Path, name: str | None = None) -> None:
    """Add or move a book to the front of the recent books list."""
    books = load_recent_books()
    path_str = str(path.resolve())

    # Keep the stored display name unless a new one is given
    existing_name = get_book_name(path)
    books = [b for b in books if b.path != path_str]

    books.insert(0, RecentBook(
        path=path_str,
        name=name or existing_name or path.stem,
        last_opened=datetime.now(),
    ))

    save_recent_books(books[:MAX_RECENT_BOOKS])


def get_book_name(path: Path) -> str | None:
    """Get the stored display name for a book."""
    path_str = str(path.resolve())
    for book in load_recent_books():
        if book.path == path_str:
            return book.name
    return None


def remove_recent_book(path: Path) -> None:
    """Remove a book from the recent books list."""
    books = load_recent_books()
    path_str = str(path.resolve())
    books = [b for b in books if b.path != path_str]
    save_recent_books(books)


def load_settings() -> ProjectionSettings:
    """Load projection settings, falling back to defaults."""
    ensure_config_dir()
    if not SETTINGS_FILE.exists():
        return ProjectionSettings()

    try:
        with open(SETTINGS_FILE, "r") as f:
            return ProjectionSettings(**json.load(f))
    except (json.JSONDecodeError, TypeError, ValidationError):
        logger.warning("Ignoring unreadable settings file %s", SETTINGS_FILE)
        return ProjectionSettings()


def save_settings(settings: ProjectionSettings) -> None:
    ensure_config_dir()
    with open(SETTINGS_FILE, "w") as f:
        json.dump(settings.model_dump(mode="json"), f, indent=2)
