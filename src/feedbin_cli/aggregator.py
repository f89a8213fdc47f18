"""Build the reading list from the unread set, entries and feed catalog."""

import dataclasses
import logging
from datetime import datetime, timezone

from .client import FeedbinClient, FetchError
from .credentials import Credential
from .models import READING_LIST_CAP, Entry, ReadingList

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(entry: Entry) -> datetime:
    return entry.published_at or _OLDEST


def aggregate(client: FeedbinClient, credential: Credential) -> ReadingList:
    """Fetch unread entries and join them with their feed titles.

    Raises:
        FetchError: If the unread ids or the entries cannot be fetched. A
            failing feed catalog only leaves feed titles empty.
    """
    unread_ids = client.list_unread_ids(credential)
    if not unread_ids:
        logger.info("No unread entries")
        return ReadingList()

    # newest-referenced first, then cap
    ids = list(dict.fromkeys(reversed(unread_ids)))[:READING_LIST_CAP]
    entries = client.get_entries(credential, ids)

    feed_titles: dict[int, str] = {}
    feeds_resolved = True
    referenced = {entry.feed_id for entry in entries}
    try:
        feeds = client.list_feeds(credential)
    except FetchError as e:
        logger.warning("Could not resolve feed titles, continuing without them: %s", e)
        feeds_resolved = False
    else:
        feed_titles = {feed.id: feed.title for feed in feeds if feed.id in referenced}

    joined = [
        dataclasses.replace(entry, feed_title=feed_titles.get(entry.feed_id, ""))
        for entry in entries
    ]
    # sorted() is stable with reverse=True, ties keep fetch order
    joined.sort(key=_sort_key, reverse=True)

    reading_list = ReadingList(joined, feeds_resolved=feeds_resolved)
    if len(reading_list) < len(joined):
        logger.debug("Dropped %d duplicate entries", len(joined) - len(reading_list))
    logger.info("Reading list holds %d entries", len(reading_list))
    return reading_list
