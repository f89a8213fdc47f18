"""Local credential storage for feedbin-cli.

Credentials are kept as a small JSON blob (``{"email": ..., "password": ...}``)
inside the configured directory.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import SecretStr

from .config import Config
from .errors import FeedbinError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    """Email and password pair used for HTTP basic auth."""

    email: str
    password: SecretStr

    @classmethod
    def from_plain(cls, email: str, password: str) -> "Credential":
        return cls(email=email, password=SecretStr(password))

    @property
    def auth(self) -> tuple[str, str]:
        """Basic auth tuple in the form httpx expects."""
        return (self.email, self.password.get_secret_value())


class CredentialStore:
    """Loads and persists the single account credential."""

    def __init__(self, config: Config):
        self.path: Path = config.credentials_file

    def load(self) -> Credential | None:
        """Load the stored credential.

        Returns:
            The credential, or None if nothing has been stored yet

        Raises:
            MalformedCredentialsError: If the file exists but cannot be used
        """
        if not self.path.exists():
            logger.debug("No credentials at %s", self.path)
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            email = data["email"]
            password = data["password"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise MalformedCredentialsError(
                "Error reading credentials. Please authenticate again."
            ) from e

        if not isinstance(email, str) or not isinstance(password, str):
            raise MalformedCredentialsError("Error reading credentials. Please authenticate again.")

        return Credential.from_plain(email, password)

    def require(self) -> Credential:
        """Like load(), but raise NotAuthenticatedError when nothing is stored."""
        credential = self.load()
        if credential is None:
            raise NotAuthenticatedError(
                "Please authenticate first using: feedbin authenticate EMAIL PASSWORD"
            )
        return credential

    def save(self, credential: Credential) -> None:
        """Write the credential to disk, readable only by the current user."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"email": credential.email, "password": credential.password.get_secret_value()}
        self.path.write_text(json.dumps(payload), encoding="utf-8")
        os.chmod(self.path, 0o600)
        logger.info("Stored credentials in %s", self.path)


class NotAuthenticatedError(FeedbinError):
    """Raised when no credential has been stored yet."""


class MalformedCredentialsError(FeedbinError):
    """Raised when the stored credential file is unreadable or corrupt."""
