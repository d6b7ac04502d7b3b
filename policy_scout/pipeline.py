"""Resolution pipeline: policy check, asset enumeration, source collection.

The directory has already been fetched by the caller (listing mode stops
there). From a directory and a policy id, this module:

1. Resolves the policy id against the directory (aborts if unknown).
2. Enumerates the policy's assets, minus the policy's self-reference.
3. Walks the assets one at a time, extracting file sources and folding
   them into a deduplicated set until the quota is reached.

The walk is sequential and each metadata fetch blocks, so wall-clock time
grows with the number of assets inspected before the quota fills.

Which sources are collected depends on the order the chain index lists
assets in. Two runs against a changing backend may pick different
sources for the same quota; the "first N found" policy is intended.

Usage:
    from policy_scout.pipeline import collect_image_sources

    result = collect_image_sources(directory, policy_id, chain, quota=10)
    for src in sorted(result.sources):
        print(src)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from policy_scout.assets import enumerate_assets
from policy_scout.chain import AssetSource
from policy_scout.constants import DEFAULT_QUOTA
from policy_scout.errors import FetchError, InvalidSettingError
from policy_scout.extract import extract_sources
from policy_scout.models import CollectionDirectory
from policy_scout.resolver import resolve
from policy_scout.sources import accumulate

logger = logging.getLogger(__name__)

PROGRESS_NOTICE = "Computing image sources..."


@dataclass
class SkippedAsset:
    """An asset whose metadata could not be used in skip mode.

    Attributes:
        asset_id: The asset that was skipped.
        error: The fetch or parse failure that caused the skip.
    """

    asset_id: str
    error: FetchError

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"asset_id": self.asset_id, "error": self.error.to_dict()}


@dataclass
class HarvestResult:
    """Outcome of one pipeline run.

    Attributes:
        policy_id: The resolved policy.
        quota: Maximum number of distinct sources requested.
        sources: Normalized, deduplicated image sources (unordered).
        assets_total: Assets enumerated for the policy (self-reference removed).
        assets_inspected: Assets whose metadata was fetched before stopping.
        quota_reached: True if the walk stopped because the quota filled.
        skipped: Assets skipped in skip mode; always empty in fail-fast mode.
    """

    policy_id: str
    quota: int
    sources: set[str] = field(default_factory=set)
    assets_total: int = 0
    assets_inspected: int = 0
    quota_reached: bool = False
    skipped: list[SkippedAsset] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict; sources are sorted for stable output."""
        return {
            "policy_id": self.policy_id,
            "quota": self.quota,
            "sources": sorted(self.sources),
            "count": len(self.sources),
            "assets_total": self.assets_total,
            "assets_inspected": self.assets_inspected,
            "quota_reached": self.quota_reached,
            "skipped": [s.to_dict() for s in self.skipped],
        }


def collect_image_sources(
    directory: CollectionDirectory,
    policy_id: str,
    source: AssetSource,
    *,
    quota: int = DEFAULT_QUOTA,
    skip_bad_assets: bool = False,
    notify: Callable[[str], None] | None = None,
) -> HarvestResult:
    """Resolve ``policy_id`` and collect up to ``quota`` distinct image sources.

    Args:
        directory: Parsed collection directory.
        policy_id: Policy to resolve; must be listed in ``directory``.
        source: Chain index to enumerate assets and fetch metadata from.
        quota: Positive maximum number of distinct sources.
        skip_bad_assets: If True, an asset whose metadata fetch or parse
            fails is recorded and skipped instead of aborting the run.
        notify: Optional callback for user-facing progress messages.

    Returns:
        HarvestResult with the collected sources.

    Raises:
        InvalidSettingError: If quota is not positive.
        PolicyNotFoundError: If the policy is not in the directory. No
            enumeration request is made in that case.
        FetchError: On any service failure (per-asset failures only when
            skip_bad_assets is False).
    """
    if quota < 1:
        raise InvalidSettingError("quota", quota, "must be a positive integer")

    resolve(policy_id, directory)
    asset_ids = enumerate_assets(source, policy_id)
    result = HarvestResult(policy_id=policy_id, quota=quota, assets_total=len(asset_ids))

    logger.info(PROGRESS_NOTICE)
    if notify is not None:
        notify(PROGRESS_NOTICE)

    for asset_id in asset_ids:
        result.assets_inspected += 1
        try:
            raw_sources = extract_sources(source, asset_id)
        except FetchError as err:
            if not skip_bad_assets:
                raise
            logger.warning("Skipping asset %s: %s", asset_id, err)
            result.skipped.append(SkippedAsset(asset_id=asset_id, error=err))
            continue

        logger.debug("Asset %s: %d raw sources", asset_id, len(raw_sources))
        if accumulate(raw_sources, quota, result.sources):
            result.quota_reached = True
            break

    if result.skipped:
        logger.warning("Skipped %d of %d assets", len(result.skipped), result.assets_inspected)
    logger.info(
        "Collected %d sources from %d of %d assets",
        len(result.sources),
        result.assets_inspected,
        result.assets_total,
    )
    return result
