"""Access-key check for administrative endpoints.

Key source, first match wins:
    CIVLE_ACCESS_KEY        -- settings.access_key
    CIVLE_ACCESS_KEY_FILE   -- first line of the file (default endpoint_key.txt)

The file is re-read on every check so a rotated key applies immediately.
No configured key means every admin request is refused.
"""
import logging
import secrets

from civle.config import Settings
from civle.domain.errors import AuthError

log = logging.getLogger("civle.auth")


def configured_access_key(settings: Settings) -> str | None:
    if settings.access_key:
        return settings.access_key
    try:
        with open(settings.access_key_file, "r", encoding="utf-8") as f:
            key = f.readline().strip()
    except OSError:
        return None
    return key or None


def verify_access_key(settings: Settings, provided: str | None) -> None:
    """Raise AuthError unless *provided* matches the configured key."""
    expected = configured_access_key(settings)
    if expected is None:
        log.warning("Admin request refused: no access key configured")
        raise AuthError()
    if not provided or not secrets.compare_digest(provided.encode(), expected.encode()):
        raise AuthError()
