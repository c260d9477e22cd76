import json
import logging
from typing import Any, List, Optional

from .errors import ManifestError
from .http_client import HttpClient
from .models import GameDefinition, ManifestEntry

GAMES_PATH = "games.json"
FILES_PATH = "files.json"


def _load_records(text: str, document: str) -> List[dict]:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ManifestError(f"{document} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ManifestError(f"{document} must be a JSON array")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ManifestError(f"{document}[{index}] is not an object")
    return data


def _str_list(value: Any, field_name: str, document: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ManifestError(f"{document}: '{field_name}' must be a list of strings")
    return list(value)


def parse_games(text: str) -> List[GameDefinition]:
    """Parse games.json. Any malformed record fails the whole document."""
    games = []
    engines = set()
    for item in _load_records(text, GAMES_PATH):
        try:
            engine = item["engine"]
            clients = _str_list(item["client"] if "client" in item else item["clients"], "client", GAMES_PATH)
        except KeyError as e:
            raise ManifestError(f"{GAMES_PATH}: missing field {e}") from e

        if not isinstance(engine, str) or not engine:
            raise ManifestError(f"{GAMES_PATH}: 'engine' must be a non-empty string")
        if "/" in engine:
            raise ManifestError(f"{GAMES_PATH}: engine '{engine}' must not contain '/'")
        if not clients:
            raise ManifestError(f"{GAMES_PATH}: game '{engine}' has no clients")
        if engine in engines:
            raise ManifestError(f"{GAMES_PATH}: duplicate engine '{engine}'")
        engines.add(engine)

        app_id = item.get("app_id")
        if app_id is not None and (isinstance(app_id, bool) or not isinstance(app_id, int)):
            raise ManifestError(f"{GAMES_PATH}: 'app_id' of '{engine}' must be an integer")

        games.append(GameDefinition(
            engine=engine,
            clients=clients,
            references=_str_list(item.get("references", []), "references", GAMES_PATH),
            app_id=app_id or None
        ))
    return games


def parse_files(text: str) -> List[ManifestEntry]:
    """Parse files.json. Hashes are normalised to lowercase."""
    entries = []
    for item in _load_records(text, FILES_PATH):
        try:
            name = item["name"]
            digest = item["hash"]
        except KeyError as e:
            raise ManifestError(f"{FILES_PATH}: missing field {e}") from e

        size = item.get("size", 0)
        if not isinstance(name, str) or not isinstance(digest, str):
            raise ManifestError(f"{FILES_PATH}: 'name' and 'hash' must be strings")
        if isinstance(size, bool) or not isinstance(size, int):
            raise ManifestError(f"{FILES_PATH}: 'size' of '{name}' must be an integer")

        entries.append(ManifestEntry(name=name, size=size, hash=digest.lower()))
    return entries


def find_game_by_client(games: List[GameDefinition], client: str) -> Optional[GameDefinition]:
    for game in games:
        if client in game.clients:
            return game
    return None


class ManifestApi:
    def __init__(self, master_client: HttpClient):
        self.master_client = master_client

    def fetch_games(self) -> List[GameDefinition]:
        games = parse_games(self.master_client.get_text(GAMES_PATH))
        logging.debug(f"Loaded {len(games)} games from {GAMES_PATH}")
        return games

    def fetch_files(self) -> List[ManifestEntry]:
        entries = parse_files(self.master_client.get_text(FILES_PATH))
        logging.debug(f"Loaded {len(entries)} entries from {FILES_PATH}")
        return entries

    def file_path(self, entry: ManifestEntry) -> str:
        """Remote path of an entry, relative to the master base URL."""
        return entry.name
