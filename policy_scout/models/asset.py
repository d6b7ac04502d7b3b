"""Asset dataclasses for the chain index responses.

PolicyAsset is one row of the asset-by-policy listing, AssetMetadata the
slice of the asset detail we consume, and AssetFile one entry of the
optional ``files`` list inside on-chain metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from policy_scout.models.collection import require_str


@dataclass(frozen=True)
class PolicyAsset:
    """An asset listed under a policy.

    Attributes:
        asset: Asset reference (policy id concatenated with hex asset name).
        quantity: Circulating quantity as reported by the service.
    """

    asset: str
    quantity: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> PolicyAsset:
        """Create PolicyAsset from a listing row."""
        if not isinstance(data, dict):
            raise ValueError(f"asset entry must be an object, got {type(data).__name__}")
        quantity = data.get("quantity")
        return cls(
            asset=require_str(data, "asset"),
            quantity=quantity if isinstance(quantity, str) else None,
        )


@dataclass(frozen=True)
class AssetFile:
    """A media file referenced by on-chain metadata.

    Attributes:
        media_type: MIME type (``mediaType`` on the wire).
        name: File name.
        src: Source reference, often ``ipfs://<cid>``.
    """

    media_type: str
    name: str
    src: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict (wire shape)."""
        return {"mediaType": self.media_type, "name": self.name, "src": self.src}

    @classmethod
    def from_dict(cls, data: Any) -> AssetFile:
        """Create AssetFile from a ``files`` entry. Extra keys are ignored."""
        if not isinstance(data, dict):
            raise ValueError(f"file entry must be an object, got {type(data).__name__}")
        return cls(
            media_type=require_str(data, "mediaType"),
            name=require_str(data, "name"),
            src=require_str(data, "src"),
        )


@dataclass
class AssetMetadata:
    """Per-asset detail; only the sparse on-chain metadata is kept.

    Attributes:
        asset: Asset reference the detail belongs to.
        onchain_metadata: Loosely typed attribute bag, or None when absent.
    """

    asset: str
    onchain_metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Any, asset: str) -> AssetMetadata:
        """Create AssetMetadata from the asset detail response."""
        if not isinstance(data, dict):
            raise ValueError(f"asset detail must be an object, got {type(data).__name__}")
        metadata = data.get("onchain_metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise ValueError(
                f"field 'onchain_metadata' must be an object, got {type(metadata).__name__}"
            )
        return cls(asset=asset, onchain_metadata=metadata)
