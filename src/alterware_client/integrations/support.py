import sys
import logging
from typing import Tuple

from .shortcuts import WindowsShortcuts, UnsupportedShortcuts
from .steam import SteamLibrary, NoLibrary, locate_steam_root


def platform_capabilities(platform: str = sys.platform) -> Tuple[object, object]:
    """(game library, shortcut factory) for the running platform."""
    if not platform.startswith('win'):
        return NoLibrary(), UnsupportedShortcuts()

    steam_root = locate_steam_root()
    if steam_root is None:
        logging.info("Steam not found.")
        return NoLibrary(), WindowsShortcuts()
    return SteamLibrary(steam_root), WindowsShortcuts()
