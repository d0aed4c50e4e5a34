"""Game rules shared by the core services and the server."""

import re

# Contestant names: letters, digits, underscore and hyphen only.
NAME_PATTERN = re.compile(r"[0-9A-Za-z_-]+")

IDENTITY_TTL_SECONDS: int = 6 * 60 * 60
IDENTITY_CACHE_MAX_ENTRIES: int = 1024

UNKNOWN_PLAYER_TEMPLATE: str = "UNKNOWN No.{number}"
