from dataclasses import dataclass
import os

LAUNCHER_VERSION = "0.6.2"

@dataclass
class LauncherConfig:
    master_url: str        # games.json, files.json and file bodies
    github_api_url: str    # release lookup for the self-update check
    repo_owner: str
    repo_name: str
    launcher_name: str     # binary copied into game dirs and targeted by shortcuts
    http_timeout: float
    max_retries: int
    update_grace_seconds: float

def load_config() -> LauncherConfig:
    # Defaults, each overridable from the environment
    return LauncherConfig(
        master_url=os.environ.get("ALTERWARE_MASTER_URL", "https://master.alterware.dev"),
        github_api_url=os.environ.get("ALTERWARE_GITHUB_API", "https://api.github.com"),
        repo_owner=os.environ.get("ALTERWARE_REPO_OWNER", "mxve"),
        repo_name=os.environ.get("ALTERWARE_REPO_NAME", "alterware-launcher"),
        launcher_name=os.environ.get("ALTERWARE_LAUNCHER_NAME", "alterware-launcher.exe"),
        http_timeout=float(os.environ.get("ALTERWARE_HTTP_TIMEOUT", "10.0")),
        max_retries=int(os.environ.get("ALTERWARE_MAX_RETRIES", "3")),
        update_grace_seconds=float(os.environ.get("ALTERWARE_UPDATE_GRACE", "6")),
    )
