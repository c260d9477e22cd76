class LauncherError(Exception):
    """Base class for failures that abort the current launcher run."""


class TransportError(LauncherError):
    """HTTP fetch or download failed after all retries."""


class ManifestError(LauncherError):
    """games.json / files.json could not be parsed or contained an unsafe entry."""


class ShortcutError(LauncherError):
    pass


class LaunchError(LauncherError):
    pass


class SelectionError(LauncherError):
    """Interactive input could not be read."""


class GameNotFound(LauncherError):
    pass
