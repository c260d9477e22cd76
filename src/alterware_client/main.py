#!/usr/bin/env python3
"""
AlterWare Launcher
------------------
Keeps an AlterWare client in sync with the master server's files.json and
starts it. On first run it installs into the current directory or a
detected Steam install.
"""

import os
import sys
import logging
from pathlib import Path
from typing import List, Optional

from alterware_client.cli import parse_options
from alterware_client.config import LAUNCHER_VERSION, LauncherConfig, load_config
from alterware_client.errors import GameNotFound, LauncherError
from alterware_client.http_client import HttpClient
from alterware_client.installer import Installer
from alterware_client.integrations.support import platform_capabilities
from alterware_client.launch import client_executable, launch
from alterware_client.manifest import ManifestApi
from alterware_client.models import LauncherOptions
from alterware_client.prompt import ConsolePrompt
from alterware_client.resolver import ContextResolver
from alterware_client.synchronizer import Synchronizer
from alterware_client.updater import SelfUpdateGate

INSTALL_COMPLETE = "Installation complete. Please run the launcher again or use a shortcut to launch the game."


class Launcher:
    def __init__(self, config: LauncherConfig, prompt=None, library=None, shortcuts=None,
                 master_client: Optional[HttpClient] = None, github_client: Optional[HttpClient] = None,
                 launcher_path: Optional[Path] = None):
        self.config = config
        self.prompt = prompt or ConsolePrompt()
        if library is None or shortcuts is None:
            detected_library, detected_shortcuts = platform_capabilities()
            library = library or detected_library
            shortcuts = shortcuts or detected_shortcuts

        # Master server for games.json, files.json and file bodies
        self.master_client = master_client or HttpClient(config.master_url, config.http_timeout, config.max_retries)
        # GitHub API for the launcher's own releases
        self.github_client = github_client or HttpClient(config.github_api_url, config.http_timeout, 0)

        self.manifest_api = ManifestApi(self.master_client)
        self.synchronizer = Synchronizer(self.manifest_api, self.master_client)
        self.resolver = ContextResolver(self.prompt, library, shortcuts, config)
        self.installer = Installer(self.synchronizer, self.prompt, shortcuts, config, launcher_path)
        self.update_gate = SelfUpdateGate(self.github_client, config)

    def _not_found(self) -> int:
        print("Game not found!")
        print(
            "Place the launcher in the game folder, if that doesn't work specify the client "
            f"on the command line (ex. {self.config.launcher_name} iw4-sp)"
        )
        self.prompt.wait_for_enter()
        return 1

    def run(self, options: LauncherOptions, cwd: Path) -> int:
        if not options.skip_self_update:
            self.update_gate.check(LAUNCHER_VERSION, options.update_only)

        games = self.manifest_api.fetch_games()

        try:
            context = self.resolver.resolve(options, games, cwd)
        except GameNotFound as e:
            logging.error(str(e))
            return self._not_found()

        if context is None:
            context = self.installer.select_manual(games, cwd, options.update_only)

        if context.first_run:
            self.installer.install(context)
            print(INSTALL_COMPLETE)
            self.prompt.wait_for_enter("")
            return 0

        self.synchronizer.synchronize(context.game, context.target_dir)
        if not context.update_only:
            launch(client_executable(context), context.target_dir)
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    level = os.environ.get("ALTERWARE_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format='%(levelname)s: %(message)s')

    options = parse_options(sys.argv[1:] if argv is None else argv)
    try:
        launcher = Launcher(load_config())
        return launcher.run(options, Path.cwd())
    except LauncherError as e:
        logging.error(f"{e}")
        return 1
    except OSError as e:
        logging.error(f"File system error: {e}")
        return 1
    except KeyboardInterrupt:
        logging.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
