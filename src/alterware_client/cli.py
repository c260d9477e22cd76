import logging
from typing import Optional, Sequence

from .models import LauncherOptions

UPDATE_FLAG = "update"
SKIP_SELF_UPDATE_FLAG = "skip-launcher-update"


def parse_options(argv: Sequence[str]) -> LauncherOptions:
    """
    Parse launcher arguments (without the program name).

    ``update`` and ``skip-launcher-update`` are flags, with or without a
    leading ``--``. The first remaining token names the client.
    """
    update_only = False
    skip_self_update = False
    client: Optional[str] = None

    for token in argv:
        flag = token[2:] if token.startswith("--") else token
        if flag == UPDATE_FLAG:
            update_only = True
        elif flag == SKIP_SELF_UPDATE_FLAG:
            skip_self_update = True
        elif client is None:
            client = token
        else:
            logging.warning(f"Ignoring extra argument '{token}'")

    return LauncherOptions(client=client, update_only=update_only, skip_self_update=skip_self_update)
