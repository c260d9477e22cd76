import hashlib
import json
from pathlib import Path

import pytest

from alterware_client.config import LauncherConfig
from alterware_client.errors import SelectionError, ShortcutError, TransportError
from alterware_client.models import GameDefinition


def sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


class FakeMaster:
    """Stands in for the master server HttpClient."""

    def __init__(self, games=None, bodies=None):
        self.games = games or []
        self.bodies = dict(bodies or {})
        self.hash_overrides = {}
        self.downloads = []
        self.failing = set()

    def files_json(self):
        return json.dumps([
            {
                "name": name,
                "size": len(body),
                "hash": self.hash_overrides.get(name, sha1(body)),
            }
            for name, body in self.bodies.items()
        ])

    def get_text(self, path):
        if path == "games.json":
            return json.dumps(self.games)
        if path == "files.json":
            return self.files_json()
        raise TransportError(f"unexpected path {path}")

    def download_file(self, path, destination: Path):
        if path in self.failing:
            raise TransportError(f"Failed to download {path}")
        self.downloads.append(path)
        destination.write_bytes(self.bodies[path])
        return len(self.bodies[path])


class ScriptedPrompt:
    def __init__(self, *answers):
        self.answers = list(answers)
        self.messages = []
        self.waited = 0

    def ask(self, message):
        self.messages.append(message)
        if not self.answers:
            raise SelectionError("script exhausted")
        return self.answers.pop(0)

    def wait_for_enter(self, message="Press enter to exit..."):
        self.waited += 1


class FakeShortcuts:
    supported = True

    def __init__(self, desktop: Path, fail=False):
        self.desktop = desktop
        self.fail = fail
        self.created = []

    def desktop_dir(self):
        return self.desktop

    def create(self, target, arguments, icon, destination):
        if self.fail:
            raise ShortcutError(f"Failed to create shortcut {destination}")
        self.created.append((target, arguments, icon, destination))
        return destination


class NoShortcuts(FakeShortcuts):
    supported = False


class FakeLibrary:
    def __init__(self, installed=None):
        self.installed = installed or []

    def find_installed(self, games):
        return list(self.installed)


@pytest.fixture
def config():
    return LauncherConfig(
        master_url="http://master.test",
        github_api_url="http://github.test",
        repo_owner="owner",
        repo_name="launcher",
        launcher_name="alterware-launcher.exe",
        http_timeout=1.0,
        max_retries=0,
        update_grace_seconds=6,
    )


@pytest.fixture
def catalog():
    return [
        GameDefinition(engine="iw4", clients=["iw4x"], references=["iw4x.exe", "iw4mp.exe"], app_id=10190),
        GameDefinition(engine="iw5", clients=["iw5-mod"], references=["iw5mp.exe"], app_id=42690),
        GameDefinition(engine="iw6", clients=["iw6-mod"], references=["iw6mp64_ship.exe"], app_id=209170),
        GameDefinition(engine="s1", clients=["s1-mod"], references=["s1_mp64_ship.exe"], app_id=209650),
        GameDefinition(engine="iw7", clients=["iw7-mod-sp", "iw7-mod"], references=["iw7_ship.exe"]),
    ]
