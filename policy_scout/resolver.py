"""Policy resolution against the collection directory."""

from __future__ import annotations

import logging

from policy_scout.errors import PolicyNotFoundError
from policy_scout.models import CollectionDirectory

logger = logging.getLogger(__name__)


def resolve(policy_id: str, directory: CollectionDirectory) -> None:
    """Check that ``policy_id`` is one of the directory's collection ids.

    Raises:
        PolicyNotFoundError: If the id is not listed.
    """
    policy_ids = directory.collection_ids()
    logger.debug("Known policy ids: %s", sorted(policy_ids))
    if policy_id not in policy_ids:
        raise PolicyNotFoundError(policy_id)
    logger.info("Policy %s found in directory", policy_id)
