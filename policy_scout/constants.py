"""Shared constants for policy-scout.

Endpoints, defaults and pipeline stage names used across modules.
"""

from __future__ import annotations

# Collection directory served by the catalog service
DEFAULT_CATALOG_URL: str = "https://api.book.io/api/v0/collections"

# Blockfrost API roots, keyed by the network prefix of a project id
CHAIN_API_URLS: dict[str, str] = {
    "mainnet": "https://cardano-mainnet.blockfrost.io/api/v0",
    "preprod": "https://cardano-preprod.blockfrost.io/api/v0",
    "preview": "https://cardano-preview.blockfrost.io/api/v0",
}
DEFAULT_NETWORK: str = "mainnet"

# Blockfrost caps list endpoints at 100 entries per page
PAGE_SIZE: int = 100

DEFAULT_QUOTA: int = 10
DEFAULT_TIMEOUT: float = 30.0

IPFS_PREFIX: str = "ipfs://"

# Pipeline stages reported on fetch errors
STAGE_DIRECTORY: str = "directory"
STAGE_ENUMERATE: str = "enumerate"
STAGE_METADATA: str = "metadata"
