import logging
import subprocess
from pathlib import Path

from .errors import LaunchError
from .models import ResolvedContext


def client_executable(context: ResolvedContext) -> Path:
    return context.target_dir / f"{context.client}.exe"


def launch(executable: Path, cwd: Path) -> int:
    """Start the client and block until it exits. The exit code is only logged."""
    logging.info(f"Launching {executable}...")
    try:
        process = subprocess.Popen([str(executable)], cwd=str(cwd))
    except OSError as e:
        raise LaunchError(f"Failed to launch the game: {e}") from e

    returncode = process.wait()
    logging.debug(f"{executable.name} exited with code {returncode}")
    return returncode
