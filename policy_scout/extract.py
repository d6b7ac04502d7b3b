"""Image source extraction from on-chain metadata.

Metadata is sparse: an asset may have no ``onchain_metadata`` at all, or
metadata without a ``files`` key. Both mean "no sources". A ``files``
value that is present but malformed is an error.
"""

from __future__ import annotations

from policy_scout.chain import AssetSource
from policy_scout.constants import STAGE_METADATA
from policy_scout.errors import ResponseParseError
from policy_scout.models import AssetFile, AssetMetadata

FILES_KEY = "files"


def files_from_metadata(metadata: AssetMetadata) -> list[AssetFile]:
    """Parse the optional ``files`` list of an asset's on-chain metadata.

    Raises:
        ResponseParseError: If ``files`` is not a list of file objects.
    """
    onchain = metadata.onchain_metadata
    if onchain is None or FILES_KEY not in onchain:
        return []

    raw_files = onchain[FILES_KEY]
    if not isinstance(raw_files, list):
        raise ResponseParseError(
            f"asset:{metadata.asset}",
            f"'{FILES_KEY}' must be a list, got {type(raw_files).__name__}",
            STAGE_METADATA,
            asset_id=metadata.asset,
        )

    files = []
    for index, raw in enumerate(raw_files):
        try:
            files.append(AssetFile.from_dict(raw))
        except ValueError as err:
            raise ResponseParseError(
                f"asset:{metadata.asset}",
                f"{FILES_KEY}[{index}]: {err}",
                STAGE_METADATA,
                asset_id=metadata.asset,
            ) from err
    return files


def extract_sources(source: AssetSource, asset_id: str) -> list[str]:
    """Fetch one asset's metadata and return the raw ``src`` of each file, in order."""
    metadata = source.asset(asset_id)
    return [f.src for f in files_from_metadata(metadata)]
