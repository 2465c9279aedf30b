"""Bearer credential providers injected into the task store client and controller."""

import logging
from typing import Protocol


logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    """Source of the session's bearer credential."""

    def get_token(self) -> str | None:
        """Return the current token, or None when the session has none."""
        ...

    def invalidate(self) -> None:
        """Forget the current token after the task store rejected it."""
        ...


class InMemoryCredentialStore:
    """Holds the session credential for the lifetime of the process."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token or None

    def get_token(self) -> str | None:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token or None

    def invalidate(self) -> None:
        if self._token is not None:
            logger.info("Invalidating stored credential")
        self._token = None
