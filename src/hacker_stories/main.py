#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys

from .app import HackerStoriesApp
from .config import DEFAULT_THEME, STATE_PATH, load_config, load_themes, setup_logging
from .controller import StoriesController
from .sources.algolia import AlgoliaSource
from .storage import KeyValueStore

logger = logging.getLogger("hacker_stories")


# --- Entrypoint ---
def main() -> None:
    parser = argparse.ArgumentParser(description="Hacker News stories in the terminal")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    config = load_config()
    # Load themes to populate help text
    available_themes = load_themes(config)
    parser.add_argument(
        "--theme",
        type=str,
        help=f"Set theme for this run. Available: {', '.join(available_themes.keys())}",
    )
    args = parser.parse_args()

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    theme_name = args.theme or config.get("theme") or DEFAULT_THEME
    if theme_name not in available_themes:
        print(
            f"Theme '{theme_name}' not found, falling back to {DEFAULT_THEME}.",
            file=sys.stderr,
        )
        theme_name = DEFAULT_THEME

    logger.info("Using theme: %s", theme_name)

    controller = StoriesController(AlgoliaSource(config), KeyValueStore(STATE_PATH), config)
    try:
        app = HackerStoriesApp(controller, theme=theme_name, config=config)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
