"""Collection directory client.

Fetches the catalog service's list of collections. The policy ids in it
are the only ones the rest of the pipeline will accept.
"""

from __future__ import annotations

import logging

from policy_scout.constants import DEFAULT_CATALOG_URL, STAGE_DIRECTORY
from policy_scout.errors import ResponseParseError
from policy_scout.http import JsonClient
from policy_scout.models import CollectionDirectory

logger = logging.getLogger(__name__)


def fetch_directory(client: JsonClient, url: str = DEFAULT_CATALOG_URL) -> CollectionDirectory:
    """Fetch and parse the collection directory.

    Performs exactly one request; no retries.

    Args:
        client: HTTP client to issue the request with.
        url: Directory endpoint.

    Returns:
        The parsed directory, entries in service order.

    Raises:
        BadStatusError: Non-2xx response.
        TransportError: Network failure.
        ResponseParseError: Body is not a valid directory document.
    """
    body = client.get_json(url, stage=STAGE_DIRECTORY)
    try:
        directory = CollectionDirectory.from_dict(body)
    except ValueError as err:
        raise ResponseParseError(url, str(err), STAGE_DIRECTORY) from err

    logger.info("Directory lists %d collections", len(directory.entries))
    return directory
