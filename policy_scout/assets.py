"""Asset enumeration for a validated policy."""

from __future__ import annotations

import logging

from policy_scout.chain import AssetSource

logger = logging.getLogger(__name__)


def enumerate_assets(source: AssetSource, policy_id: str) -> list[str]:
    """Return the asset references belonging to ``policy_id``.

    The chain index lists the policy id itself as one of its assets; that
    pseudo-asset is dropped. Order is whatever the service returned.
    """
    listed = source.assets_by_policy(policy_id)
    assets = [row.asset for row in listed if row.asset != policy_id]
    logger.info(
        "Policy %s lists %d assets (%d after removing self-reference)",
        policy_id,
        len(listed),
        len(assets),
    )
    return assets
