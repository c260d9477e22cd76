import time
import logging
from typing import Callable, List

from .config import LauncherConfig
from .errors import LauncherError
from .http_client import HttpClient
from .models import ReleaseInfo


def _version_parts(version: str) -> List[int]:
    return [int(part) for part in version.strip().lstrip("vV").split(".")]


def is_newer(latest: str, current: str) -> bool:
    """True if latest is a higher dotted version than current (missing parts count as 0)."""
    try:
        latest_parts, current_parts = _version_parts(latest), _version_parts(current)
    except ValueError:
        logging.debug(f"Unparsable version: '{latest}' or '{current}'")
        return False

    width = max(len(latest_parts), len(current_parts))
    latest_parts += [0] * (width - len(latest_parts))
    current_parts += [0] * (width - len(current_parts))
    return latest_parts > current_parts


class SelfUpdateGate:
    """Warns about a newer launcher release. Never blocks the run for good."""

    def __init__(self, github_client: HttpClient, config: LauncherConfig, sleep: Callable[[float], None] = time.sleep):
        self.github_client = github_client
        self.config = config
        self.sleep = sleep

    def latest_release(self) -> ReleaseInfo:
        data = self.github_client.get_json(
            f"repos/{self.config.repo_owner}/{self.config.repo_name}/releases/latest"
        )
        return ReleaseInfo(
            version=str(data["tag_name"]),
            url=data.get("html_url") or f"https://github.com/{self.config.repo_owner}/{self.config.repo_name}/releases/latest"
        )

    def check(self, current_version: str, update_only: bool = False) -> bool:
        """Returns True when a newer release was announced."""
        try:
            release = self.latest_release()
        except (LauncherError, KeyError, TypeError, ValueError, AttributeError) as e:
            logging.warning(f"Could not check for launcher updates: {e}")
            return False

        if not is_newer(release.version, current_version):
            logging.debug(f"Launcher is up to date ({current_version})")
            return False

        logging.warning(
            f"A new version of the launcher is available: {release.version} (current: {current_version})"
        )
        logging.warning(f"Download it at {release.url}")
        if not update_only:
            logging.info(f"Continuing in {self.config.update_grace_seconds:g} seconds...")
            self.sleep(self.config.update_grace_seconds)
        return True
