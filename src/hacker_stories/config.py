from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

from textual.theme import BUILTIN_THEMES, Theme

# --- Configuration ---
API_ENDPOINT = "https://hn.algolia.com/api/v1/search?query="
HN_ITEM_URL = "https://news.ycombinator.com/item?id={object_id}"
DEFAULT_SEARCH_TERM = "React"
SEARCH_STORAGE_KEY = "search"
DEFAULT_THEME = "dracula"
HTTP_TIMEOUT = 15
HTTP_RETRIES = 0

CONFIG_DIR = os.path.expanduser("~/.config/hacker_stories")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")
STATE_PATH = os.path.join(CONFIG_DIR, "state.json")

REQUEST_HEADERS = {
    "User-Agent": "hacker-stories/0.1 (+https://hn.algolia.com/api)",
    "Accept": "application/json",
}

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": (
        "[b {color}]enter[/] search, [b {color}]d[/] dismiss, "
        "[b {color}]o[/] open, [b {color}]r[/] refresh"
    ),
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "theme": DEFAULT_THEME,
    "api_endpoint": API_ENDPOINT,
    "default_search_term": DEFAULT_SEARCH_TERM,
    "http_timeout": HTTP_TIMEOUT,
    "http_retries": HTTP_RETRIES,
    "themes": {},
    "ui": dict(UI_DEFAULTS),
}

# --- Logging ---
logger = logging.getLogger("hacker_stories")


def setup_logging(debug: bool = False, log_dir: str = "/tmp") -> Optional[str]:
    """Send debug output to a timestamped file in ``log_dir``.

    The TUI owns the terminal, so nothing is logged unless ``debug`` is set.
    urllib3 stays at WARNING; its per-request lines drown the fetch cycles.
    """
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    os.makedirs(log_dir, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    debug_path = os.path.join(log_dir, f"hacker_stories_debug_{stamp}_{os.getpid()}.log")

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists(path: str = CONFIG_PATH) -> None:
    """Write the default config file if the user's config file is not found."""
    if os.path.exists(path):
        return
    logger.info("Config file not found at %s, creating default.", path)
    save_config(DEFAULT_CONFIG, path)


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load the main configuration file, filling in defaults for missing keys."""
    ensure_config_file_exists(path)
    config = dict(DEFAULT_CONFIG)
    try:
        with open(path, "r") as f:
            loaded = json.load(f)
        logger.info("Loaded config from %s", path)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        return config
    if not isinstance(loaded, dict):
        logger.error("Ignoring config at %s: expected a JSON object", path)
        return config
    config.update(loaded)
    return config


def save_config(config: Dict[str, Any], path: str = CONFIG_PATH) -> None:
    """Save the main configuration file."""
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", path)
    except IOError as e:
        logger.error("Failed to save config to %s: %s", path, e)


def load_themes(config: Dict[str, Any]) -> Dict[str, Theme]:
    """Return the built-in Textual themes merged with the user's definitions."""
    themes = dict(BUILTIN_THEMES)
    for name, definition in config.get("themes", {}).items():
        try:
            themes[name] = Theme(name=name, **definition)
        except Exception as e:
            # Ignore invalid theme definitions
            logger.warning("Ignoring invalid theme definition for '%s': %s", name, e)
    return themes
