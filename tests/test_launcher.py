import pytest

from alterware_client import main as main_module
from alterware_client.errors import TransportError
from alterware_client.main import Launcher
from alterware_client.models import InstalledGame, LauncherOptions

from conftest import FakeLibrary, FakeMaster, NoShortcuts, ScriptedPrompt

GAMES = [
    {"engine": "iw4", "client": ["iw4x"], "references": ["iw4x.exe", "iw4mp.exe"], "app_id": 10190},
    {"engine": "iw5", "client": ["iw5-mod"], "references": ["iw5mp.exe"], "app_id": 42690},
]
BODIES = {"iw4/iw4x.exe": b"iw4x", "iw4/iw4x/iw4x_00.iwd": b"assets", "iw5/iw5-mod.exe": b"iw5"}


class OfflineGithub:
    def get_json(self, path):
        raise TransportError("offline")


@pytest.fixture
def launched(monkeypatch):
    calls = []
    monkeypatch.setattr(main_module, "launch", lambda executable, cwd: calls.append((executable, cwd)) or 0)
    return calls


def _launcher(config, tmp_path, prompt=None, library=None):
    master = FakeMaster(games=GAMES, bodies=BODIES)
    launcher = Launcher(
        config,
        prompt=prompt or ScriptedPrompt(),
        library=library or FakeLibrary(),
        shortcuts=NoShortcuts(tmp_path / "Desktop"),
        master_client=master,
        github_client=OfflineGithub(),
    )
    return launcher, master


def test_detected_game_is_updated_and_launched(config, tmp_path, launched):
    (tmp_path / "iw4mp.exe").touch()
    launcher, master = _launcher(config, tmp_path)

    assert launcher.run(LauncherOptions(), tmp_path) == 0

    assert sorted(master.downloads) == ["iw4/iw4x.exe", "iw4/iw4x/iw4x_00.iwd"]
    assert launched == [(tmp_path / "iw4x.exe", tmp_path)]


def test_update_only_does_not_launch(config, tmp_path, launched):
    (tmp_path / "iw5mp.exe").touch()
    launcher, master = _launcher(config, tmp_path)

    assert launcher.run(LauncherOptions(update_only=True, skip_self_update=True), tmp_path) == 0

    assert master.downloads == ["iw5/iw5-mod.exe"]
    assert launched == []


def test_explicit_client(config, tmp_path, launched):
    launcher, master = _launcher(config, tmp_path)

    assert launcher.run(LauncherOptions(client="iw5-mod"), tmp_path) == 0

    assert master.downloads == ["iw5/iw5-mod.exe"]
    assert launched == [(tmp_path / "iw5-mod.exe", tmp_path)]


def test_unknown_client_shows_guidance(config, tmp_path, launched, capsys):
    prompt = ScriptedPrompt()
    launcher, master = _launcher(config, tmp_path, prompt=prompt)

    assert launcher.run(LauncherOptions(client="iw4-sp"), tmp_path) == 1

    out = capsys.readouterr().out
    assert "Game not found!" in out
    assert "alterware-launcher.exe iw4-sp" in out
    assert prompt.waited == 1
    assert master.downloads == []
    assert launched == []


def test_first_run_manual_install(config, tmp_path, launched, capsys):
    prompt = ScriptedPrompt("1")
    launcher, master = _launcher(config, tmp_path, prompt=prompt)

    assert launcher.run(LauncherOptions(), tmp_path) == 0

    assert master.downloads == ["iw5/iw5-mod.exe"]
    assert (tmp_path / "iw5-mod.exe").read_bytes() == b"iw5"
    assert "Installation complete" in capsys.readouterr().out
    assert prompt.waited == 1
    assert launched == []


def test_first_run_into_installed_game(config, tmp_path, launched):
    install = tmp_path / "Call of Duty Modern Warfare 2"
    library = FakeLibrary([InstalledGame(app_id=10190, path=install)])
    launcher, master = _launcher(config, tmp_path, prompt=ScriptedPrompt("10190"), library=library)

    assert launcher.run(LauncherOptions(), tmp_path / "Downloads") == 0

    assert (install / "iw4x" / "iw4x_00.iwd").read_bytes() == b"assets"
    assert launched == []


def test_main_reports_fatal_errors(monkeypatch, tmp_path):
    class Broken:
        def __init__(self, config):
            pass

        def run(self, options, cwd):
            raise TransportError("Failed to fetch games.json")

    monkeypatch.setattr(main_module, "Launcher", Broken)

    assert main_module.main(["iw4x"]) == 1


def test_main_reports_file_system_errors(monkeypatch):
    class ReadOnlyInstall:
        def __init__(self, config):
            pass

        def run(self, options, cwd):
            raise PermissionError(13, "Permission denied", "C:/Program Files (x86)/Steam/alterware-launcher.exe")

    monkeypatch.setattr(main_module, "Launcher", ReadOnlyInstall)

    assert main_module.main(["iw4x"]) == 1
