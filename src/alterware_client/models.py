from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path

@dataclass(frozen=True)
class GameDefinition:
    """Game entry from games.json."""
    engine: str
    clients: List[str]
    references: List[str] = field(default_factory=list)
    app_id: Optional[int] = None  # Steam app id, None if not sold on Steam

    @property
    def prefix(self) -> str:
        return f"{self.engine}/"

    def owns(self, name: str) -> bool:
        return name.startswith(self.prefix)

    def local_name(self, name: str) -> str:
        return name[len(self.prefix):]

@dataclass(frozen=True)
class ManifestEntry:
    """File entry from files.json."""
    name: str
    size: int
    hash: str

@dataclass(frozen=True)
class ResolvedContext:
    game: GameDefinition
    client: str
    target_dir: Path
    update_only: bool = False
    first_run: bool = False

@dataclass(frozen=True)
class InstalledGame:
    app_id: int
    path: Path

@dataclass(frozen=True)
class LauncherOptions:
    client: Optional[str] = None
    update_only: bool = False
    skip_self_update: bool = False

@dataclass
class ReleaseInfo:
    version: str
    url: str

@dataclass
class SyncReport:
    downloaded: List[str] = field(default_factory=list)
    skipped: int = 0
    unverified: List[str] = field(default_factory=list)  # downloaded but hash still differs
    ignored: int = 0
