import os
import logging
import subprocess
from pathlib import Path
from typing import Optional

from ..errors import ShortcutError


def _ps_quote(value: str) -> str:
    return "'{}'".format(value.replace("'", "''"))


class WindowsShortcuts:
    """Creates .lnk files through PowerShell's WScript.Shell COM object."""
    supported = True

    def desktop_dir(self) -> Path:
        return Path(os.environ.get("USERPROFILE", str(Path.home()))) / "Desktop"

    def create(self, target: Path, arguments: str, icon: Optional[Path], destination: Path) -> Path:
        script = "$WshShell = New-Object -ComObject WScript.Shell\n"
        script += f"$Shortcut = $WshShell.CreateShortcut({_ps_quote(str(destination))})\n"
        script += f"$Shortcut.TargetPath = {_ps_quote(str(target))}\n"
        script += f"$Shortcut.Arguments = {_ps_quote(arguments)}\n"
        script += f"$Shortcut.WorkingDirectory = {_ps_quote(str(target.parent))}\n"
        if icon:
            script += f"$Shortcut.IconLocation = {_ps_quote(str(icon))}\n"
        script += "$Shortcut.Save()\n"

        try:
            subprocess.run(
                ["powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-Command", script],
                check=True,
                capture_output=True,
                timeout=30
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ShortcutError(f"Failed to create shortcut {destination}: {e}") from e

        logging.debug(f"Created shortcut {destination}")
        return destination


class UnsupportedShortcuts:
    supported = False

    def desktop_dir(self) -> Path:
        return Path.home() / "Desktop"

    def create(self, target: Path, arguments: str, icon: Optional[Path], destination: Path) -> Path:
        raise ShortcutError("Shortcuts are not supported on this platform")
