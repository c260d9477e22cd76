"""
Installed Steam game discovery.

Reads ``steamapps/libraryfolders.vdf`` to enumerate library folders and
``appmanifest_<appid>.acf`` in each to find where a catalog game is installed.
"""
import os
import sys
import logging
from pathlib import Path
from typing import Dict, List, Optional

import vdf

from ..models import GameDefinition, InstalledGame


def _lower_keys(data: dict) -> Dict[str, object]:
    return {str(k).lower(): v for k, v in data.items()}


def _registry_steam_path() -> Optional[Path]:
    try:
        import winreg
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Software\Valve\Steam") as key:
            value, _ = winreg.QueryValueEx(key, "SteamPath")
        return Path(value)
    except (ImportError, OSError):
        return None


def locate_steam_root() -> Optional[Path]:
    candidates = []
    if sys.platform.startswith('win'):
        registry = _registry_steam_path()
        if registry:
            candidates.append(registry)
        candidates.append(Path(os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")) / "Steam")
    else:
        home = Path.home()
        candidates.extend([home / ".steam" / "steam", home / ".local" / "share" / "Steam"])

    for candidate in candidates:
        if (candidate / "steamapps").is_dir():
            return candidate
    return None


class SteamLibrary:
    def __init__(self, steam_root: Path):
        self.steam_root = steam_root

    def library_folders(self) -> List[Path]:
        folders = [self.steam_root]
        library_file = self.steam_root / "steamapps" / "libraryfolders.vdf"
        if not library_file.exists():
            return folders

        try:
            with open(library_file, 'r', encoding='utf-8') as f:
                data = _lower_keys(vdf.load(f)).get("libraryfolders", {})
        except (OSError, SyntaxError) as e:
            logging.warning(f"Could not read {library_file}: {e}")
            return folders

        for key, value in data.items():
            # New format: {"0": {"path": ...}}, old format: {"1": "D:\\SteamLibrary"}
            if isinstance(value, dict):
                path = _lower_keys(value).get("path")
            elif str(key).isdigit():
                path = value
            else:
                continue
            if path and Path(path) not in folders:
                folders.append(Path(path))
        return folders

    def _install_path(self, library: Path, app_id: int) -> Optional[Path]:
        manifest_file = library / "steamapps" / f"appmanifest_{app_id}.acf"
        if not manifest_file.exists():
            return None
        try:
            with open(manifest_file, 'r', encoding='utf-8') as f:
                app_state = _lower_keys(_lower_keys(vdf.load(f)).get("appstate", {}))
        except (OSError, SyntaxError) as e:
            logging.warning(f"Could not read {manifest_file}: {e}")
            return None

        install_dir = app_state.get("installdir")
        if not install_dir:
            return None
        return library / "steamapps" / "common" / install_dir

    def find_installed(self, games: List[GameDefinition]) -> List[InstalledGame]:
        """Installed catalog games, in catalog order."""
        folders = self.library_folders()
        installed = []
        for game in games:
            if not game.app_id:
                continue
            for library in folders:
                path = self._install_path(library, game.app_id)
                if path is not None:
                    installed.append(InstalledGame(app_id=game.app_id, path=path))
                    break
        return installed


class NoLibrary:
    """Used where no game library can be scanned."""

    def find_installed(self, games: List[GameDefinition]) -> List[InstalledGame]:
        return []
