"""feedbin-cli — read Feedbin unread entries from the terminal."""

from .aggregator import aggregate
from .client import (
    AuthenticationError,
    DecodeError,
    FeedbinClient,
    FetchError,
    MutationError,
)
from .config import Config, load_config
from .credentials import (
    Credential,
    CredentialStore,
    MalformedCredentialsError,
    NotAuthenticatedError,
)
from .errors import FeedbinError
from .models import Entry, Feed, ReadingList, Subscription
from .renderer import render
from .session import ReadingSession, State

__all__ = [
    "aggregate",
    "render",
    "AuthenticationError",
    "Config",
    "Credential",
    "CredentialStore",
    "DecodeError",
    "Entry",
    "Feed",
    "FeedbinClient",
    "FeedbinError",
    "FetchError",
    "MalformedCredentialsError",
    "MutationError",
    "NotAuthenticatedError",
    "ReadingList",
    "ReadingSession",
    "State",
    "Subscription",
    "load_config",
]

__version__ = "0.1.0"
