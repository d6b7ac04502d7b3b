"""Collection and CollectionDirectory dataclasses.

A Collection is one entry of the catalog service's directory listing.
Its ``collection_id`` doubles as the policy id on the chain index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def require_str(data: dict[str, Any], key: str) -> str:
    """Return ``data[key]`` if it is a string, raising ValueError otherwise."""
    if key not in data:
        raise ValueError(f"missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Collection:
    """A collection published by the catalog service.

    Attributes:
        collection_id: Policy id of the collection (identity).
        description: Human-readable description.
        blockchain: Chain the collection lives on (e.g. "cardano").
        network: Network name (e.g. "mainnet").
    """

    collection_id: str
    description: str
    blockchain: str
    network: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "collection_id": self.collection_id,
            "description": self.description,
            "blockchain": self.blockchain,
            "network": self.network,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Collection:
        """Create Collection from dict.

        Raises:
            ValueError: If data is not an object with the four string fields.
        """
        if not isinstance(data, dict):
            raise ValueError(f"collection entry must be an object, got {type(data).__name__}")
        return cls(
            collection_id=require_str(data, "collection_id"),
            description=require_str(data, "description"),
            blockchain=require_str(data, "blockchain"),
            network=require_str(data, "network"),
        )


@dataclass
class CollectionDirectory:
    """The parsed directory response: ``{"type": ..., "data": [...]}``.

    Attributes:
        type: Response type tag reported by the service.
        entries: Collections in the order the service listed them.
    """

    type: str
    entries: list[Collection] = field(default_factory=list)

    def collection_ids(self) -> set[str]:
        """Return the set of policy ids; duplicate entries collapse."""
        return {entry.collection_id for entry in self.entries}

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict (wire shape)."""
        return {
            "type": self.type,
            "data": [entry.to_dict() for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Any) -> CollectionDirectory:
        """Create CollectionDirectory from the decoded response body.

        Raises:
            ValueError: If the body does not match the directory shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"directory body must be an object, got {type(data).__name__}")
        directory_type = require_str(data, "type")
        if "data" not in data:
            raise ValueError("missing field 'data'")
        raw_entries = data["data"]
        if not isinstance(raw_entries, list):
            raise ValueError(f"field 'data' must be a list, got {type(raw_entries).__name__}")

        entries = []
        for index, raw in enumerate(raw_entries):
            try:
                entries.append(Collection.from_dict(raw))
            except ValueError as err:
                raise ValueError(f"data[{index}]: {err}") from err
        return cls(type=directory_type, entries=entries)
