import sys
import shutil
import logging
from pathlib import Path
from typing import List, Optional

from .config import LauncherConfig
from .models import GameDefinition, ResolvedContext, SyncReport
from .prompt import choose_index, confirm


def running_launcher() -> Optional[Path]:
    """Path of the launcher binary when running frozen, None from source."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve()
    return None


def setup_client_links(shortcuts, game: GameDefinition, game_dir: Path, launcher_name: str) -> List[Path]:
    """One launch-<client>.lnk per client, each passing its client to the launcher."""
    logging.info("Multiple clients installed, use the shortcuts (launch-<client>.lnk in the game directory or desktop shortcuts) to launch a specific client.")
    target = game_dir / launcher_name
    created = []
    for client in game.clients:
        created.append(shortcuts.create(
            target,
            client,
            game_dir / f"{client}.exe",
            game_dir / f"launch-{client}.lnk"
        ))
    return created


class Installer:
    def __init__(self, synchronizer, prompt, shortcuts, config: LauncherConfig, launcher_path: Optional[Path] = None):
        self.synchronizer = synchronizer
        self.prompt = prompt
        self.shortcuts = shortcuts
        self.config = config
        self.launcher_path = launcher_path if launcher_path is not None else running_launcher()

    def select_manual(self, games: List[GameDefinition], cwd: Path, update_only: bool = False) -> ResolvedContext:
        """Let the user pick any catalog client to install into cwd."""
        pairs = [(game, client) for game in games for client in game.clients]
        index = choose_index(
            self.prompt,
            "Couldn't detect any games, please select a client to install in the current directory:",
            [client for _, client in pairs]
        )
        game, client = pairs[index]
        return ResolvedContext(game=game, client=client, target_dir=cwd, update_only=update_only, first_run=True)

    def setup_desktop_links(self, game: GameDefinition, game_dir: Path) -> List[Path]:
        if not confirm(self.prompt, "Create Desktop shortcut? (Y/n)"):
            return []

        desktop = self.shortcuts.desktop_dir()
        target = game_dir / self.config.launcher_name
        created = []
        for client in game.clients:
            created.append(self.shortcuts.create(
                target,
                client,
                game_dir / f"{client}.exe",
                desktop / f"{client}.lnk"
            ))
        return created

    def copy_launcher(self, game_dir: Path) -> Optional[Path]:
        if self.launcher_path is None:
            logging.debug("Not running from a launcher binary, skipping copy")
            return None

        target_path = game_dir / self.config.launcher_name
        if target_path.exists() and target_path.resolve() == self.launcher_path.resolve():
            return None

        game_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(self.launcher_path, target_path)
        logging.info(f"Launcher copied to {game_dir}")
        return target_path

    def install(self, context: ResolvedContext) -> SyncReport:
        """
        First-run installation into context.target_dir.

        Shortcut failures propagate as ShortcutError and stop the install;
        files already written stay in place.
        """
        game, game_dir = context.game, context.target_dir

        if len(game.clients) > 1 and self.shortcuts.supported:
            setup_client_links(self.shortcuts, game, game_dir, self.config.launcher_name)

        if self.shortcuts.supported:
            self.setup_desktop_links(game, game_dir)

        self.copy_launcher(game_dir)
        return self.synchronizer.synchronize(game, game_dir)
