import logging
from pathlib import Path
from typing import List, Optional

from .config import LauncherConfig
from .errors import GameNotFound
from .installer import setup_client_links
from .manifest import find_game_by_client
from .models import GameDefinition, InstalledGame, LauncherOptions, ResolvedContext
from .prompt import choose_index


class ContextResolver:
    """
    Works out which game and client a run is for.

    Order: explicit client argument, reference files in the working
    directory, then the installed game library. Returns None when nothing
    matched so the installer can fall back to manual selection.
    """

    def __init__(self, prompt, library, shortcuts, config: LauncherConfig):
        self.prompt = prompt
        self.library = library
        self.shortcuts = shortcuts
        self.config = config

    def resolve(self, options: LauncherOptions, games: List[GameDefinition], cwd: Path) -> Optional[ResolvedContext]:
        if options.client:
            return self._from_argument(options, games, cwd)

        context = self._from_references(options, games, cwd)
        if context is not None:
            return context

        logging.info("No game specified/found. Checking for installed games..")
        return self._from_library(options, games, cwd)

    def _from_argument(self, options: LauncherOptions, games: List[GameDefinition], cwd: Path) -> ResolvedContext:
        game = find_game_by_client(games, options.client)
        if game is None:
            raise GameNotFound(f"Unknown client '{options.client}'")
        return ResolvedContext(game=game, client=options.client, target_dir=cwd, update_only=options.update_only)

    def _from_references(self, options: LauncherOptions, games: List[GameDefinition], cwd: Path) -> Optional[ResolvedContext]:
        for game in games:
            if not any((cwd / reference).exists() for reference in game.references):
                continue

            logging.debug(f"Found reference files for {game.engine} in {cwd}")
            client = game.clients[0]
            if len(game.clients) > 1 and not options.update_only:
                client = self._choose_client(game, cwd)
            return ResolvedContext(game=game, client=client, target_dir=cwd, update_only=options.update_only)
        return None

    def _choose_client(self, game: GameDefinition, cwd: Path) -> str:
        if self.shortcuts.supported:
            setup_client_links(self.shortcuts, game, cwd, self.config.launcher_name)
        else:
            logging.info("Multiple clients installed, set the client as the first argument to launch a specific client.")
        index = choose_index(self.prompt, "Select a client to launch:", game.clients)
        return game.clients[index]

    def _from_library(self, options: LauncherOptions, games: List[GameDefinition], cwd: Path) -> Optional[ResolvedContext]:
        installed = self.library.find_installed(games)
        if not installed:
            return None

        by_app_id = {game.app_id: game for game in reversed(games) if game.app_id}

        # Running from inside an installed game's folder
        for entry in installed:
            if _is_within(cwd, entry.path):
                game = by_app_id[entry.app_id]
                logging.info("Found game in current directory.")
                logging.info(f"Installing AlterWare client for {entry.app_id}.")
                return self._first_run(game, entry, options)

        selected = self._choose_installed(installed)
        if selected is None:
            return None
        return self._first_run(by_app_id[selected.app_id], selected, options)

    def _choose_installed(self, installed: List[InstalledGame]) -> Optional[InstalledGame]:
        lines = ["Installed games:"]
        lines.extend(f"{entry.app_id}: {entry.path}" for entry in installed)
        lines.append("Enter the ID of the game you want to install the AlterWare client for, enter 0 for manual selection:")
        message = "\n".join(lines)
        while True:
            answer = self.prompt.ask(message)
            if answer == "0":
                return None
            for entry in installed:
                if answer == str(entry.app_id):
                    return entry
            message = "Unknown ID, enter one of the IDs listed above or 0 for manual selection:"

    @staticmethod
    def _first_run(game: GameDefinition, entry: InstalledGame, options: LauncherOptions) -> ResolvedContext:
        return ResolvedContext(
            game=game,
            client=game.clients[0],
            target_dir=entry.path,
            update_only=options.update_only,
            first_run=True
        )


def _is_within(path: Path, parent: Path) -> bool:
    try:
        path.resolve().relative_to(parent.resolve())
        return True
    except ValueError:
        return False
