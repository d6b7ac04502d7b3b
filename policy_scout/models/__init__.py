"""Data models for policy-scout.

Models are dataclasses parsed from the catalog and chain index responses.
Each ``from_dict`` raises ValueError when the payload has the wrong shape.
"""

from __future__ import annotations

from policy_scout.models.asset import AssetFile, AssetMetadata, PolicyAsset
from policy_scout.models.collection import Collection, CollectionDirectory

__all__ = [
    # Catalog
    "Collection",
    "CollectionDirectory",
    # Chain index
    "PolicyAsset",
    "AssetMetadata",
    "AssetFile",
]
