"""Feedbin API client (REST API v2)."""

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import Config
from .credentials import Credential
from .errors import FeedbinError
from .models import Entry, Feed, Subscription

logger = logging.getLogger(__name__)

_ID_LIST = TypeAdapter(list[int])


class FeedbinClient:
    """Synchronous client for the Feedbin API.

    Every call takes the Credential explicitly and authenticates with HTTP
    basic auth. Success is exactly HTTP 200; anything else, or a transport
    error, is raised as a typed failure carrying the resource name. Nothing
    is retried.
    """

    def __init__(self, config: Config):
        self.api_url = config.api_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.api_url,
            timeout=config.request_timeout,
            follow_redirects=True,
        )

    def __enter__(self) -> "FeedbinClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def authenticate(self, credential: Credential) -> None:
        """Check a credential against the service.

        Raises:
            AuthenticationError: If the service rejects the credential
            FetchError: If the request could not be made
        """
        logger.debug("Authenticating to %s", self.api_url)
        try:
            response = self._client.get("/authentication.json", auth=credential.auth)
        except httpx.HTTPError as e:
            raise FetchError("authentication", cause=str(e)) from e

        if response.status_code != 200:
            raise AuthenticationError(f"Authentication failed: {response.status_code}")
        logger.info("Authentication successful")

    def list_unread_ids(self, credential: Credential) -> list[int]:
        """List ids of all unread entries, in the order the service returns them."""
        ids = self._get_ids("/unread_entries.json", credential, "unread entries")
        logger.info("Retrieved %d unread entry ids", len(ids))
        return ids

    def list_starred_ids(self, credential: Credential) -> list[int]:
        """List ids of all starred entries."""
        ids = self._get_ids("/starred_entries.json", credential, "starred entries")
        logger.info("Retrieved %d starred entry ids", len(ids))
        return ids

    def list_subscriptions(self, credential: Credential) -> list[Subscription]:
        """List all subscriptions of the account."""
        data = self._get_json("/subscriptions.json", credential, "subscriptions")
        subscriptions = [
            Subscription(
                id=item["id"],
                feed_id=item["feed_id"],
                title=item.get("title") or "",
            )
            for item in self._records(data, "subscriptions", ("id", "feed_id"))
        ]
        logger.info("Retrieved %d subscriptions", len(subscriptions))
        return subscriptions

    def list_feeds(self, credential: Credential) -> list[Feed]:
        """List the full feed catalog.

        The API has no batch-by-id feed lookup, so callers filter locally.
        """
        data = self._get_json("/feeds.json", credential, "feeds")
        feeds = [
            Feed(
                id=item["id"],
                title=item.get("title") or "",
            )
            for item in self._records(data, "feeds", ("id",))
        ]
        logger.info("Retrieved %d feeds", len(feeds))
        return feeds

    def get_entries(self, credential: Credential, ids: Sequence[int]) -> list[Entry]:
        """Fetch full entries for ``ids`` in a single request."""
        params = {"ids": ",".join(str(i) for i in ids), "mode": "extended"}
        data = self._get_json("/entries.json", credential, "entries", params=params)
        entries = [
            self._parse_entry(item) for item in self._records(data, "entries", ("id", "feed_id"))
        ]
        logger.info("Retrieved %d entries", len(entries))
        return entries

    def mark_as_read(self, credential: Credential, ids: Sequence[int]) -> None:
        """Remove ``ids`` from the unread set.

        Raises:
            MutationError: If the service did not confirm the change
        """
        url = "/unread_entries/delete.json"
        logger.debug("Marking %d entries as read via %s", len(ids), url)
        try:
            response = self._client.post(
                url,
                auth=credential.auth,
                json={"unread_entries": list(ids)},
            )
        except httpx.HTTPError as e:
            raise MutationError("mark as read", cause=str(e)) from e

        if response.status_code != 200:
            raise MutationError("mark as read", status=response.status_code)
        logger.info("Marked %d entries as read", len(ids))

    def _get_json(
        self,
        url: str,
        credential: Credential,
        resource: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("Fetching %s from %s", resource, url)
        try:
            response = self._client.get(url, auth=credential.auth, params=params)
        except httpx.HTTPError as e:
            raise FetchError(resource, cause=str(e)) from e

        if response.status_code != 200:
            raise FetchError(resource, status=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(resource, cause=f"invalid JSON: {e}") from e

    def _get_ids(self, url: str, credential: Credential, resource: str) -> list[int]:
        data = self._get_json(url, credential, resource)
        try:
            return _ID_LIST.validate_python(data)
        except ValidationError as e:
            raise DecodeError(resource, cause="expected a list of ids") from e

    @staticmethod
    def _records(data: Any, resource: str, required: tuple[str, ...]) -> list[dict]:
        """Check that ``data`` is a list of objects carrying integer ``required`` keys."""
        if not isinstance(data, list):
            raise DecodeError(resource, cause="expected a list")
        for item in data:
            if not isinstance(item, dict):
                raise DecodeError(resource, cause="expected a list of objects")
            for key in required:
                value = item.get(key)
                if not isinstance(value, int) or isinstance(value, bool):
                    raise DecodeError(resource, cause=f"record without integer {key!r}")
        return data

    @staticmethod
    def _parse_entry(item: dict) -> Entry:
        """Build an Entry from an API record.

        Missing optional text fields become empty strings; the raw published
        value is kept as-is and only parsed when sorting or rendering.
        """
        published = item.get("published")
        return Entry(
            id=item["id"],
            feed_id=item["feed_id"],
            title=item.get("title") or "",
            published=published if isinstance(published, str) else "",
            url=item.get("url") or "",
            author=item.get("author") or None,
            content=item.get("content"),
        )

    def close(self) -> None:
        """Close the HTTP client."""
        if not self._client.is_closed:
            self._client.close()


class AuthenticationError(FeedbinError):
    """Raised when the service rejects a credential."""


class RequestError(FeedbinError):
    """A single API call failed.

    Carries the resource name and either the HTTP status or the transport
    error description.
    """

    def __init__(self, resource: str, status: int | None = None, cause: str | None = None):
        self.resource = resource
        self.status = status
        self.cause = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.status is not None:
            return f"Failed to fetch {self.resource}. Status code: {self.status}"
        return f"Error fetching {self.resource}: {self.cause}"


class FetchError(RequestError):
    """Raised when a remote read fails."""


class DecodeError(FetchError):
    """Raised when a response body does not match the expected schema."""

    def _describe(self) -> str:
        return f"Unexpected response for {self.resource}: {self.cause}"


class MutationError(RequestError):
    """Raised when a remote write fails."""

    def _describe(self) -> str:
        if self.status is not None:
            return f"Failed to {self.resource}. Status code: {self.status}"
        return f"Error trying to {self.resource}: {self.cause}"
