"""Shared pytest fixtures for policy-scout tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from policy_scout.models import AssetMetadata, CollectionDirectory, PolicyAsset

POLICY_ID = "d5e6bf0500378d4f0da4e8dde6becec7621cd8cbf5cbb9b87013d4cc"


# =============================================================================
# Payloads
# =============================================================================


def collection_entry(collection_id: str, description: str = "A collection") -> dict[str, str]:
    """Build one directory entry in wire shape."""
    return {
        "collection_id": collection_id,
        "description": description,
        "blockchain": "cardano",
        "network": "mainnet",
    }


@pytest.fixture
def directory_body() -> dict[str, Any]:
    """Directory response listing POLICY_ID and one other collection."""
    return {
        "type": "collection",
        "data": [collection_entry(POLICY_ID, "Books"), collection_entry("other-policy")],
    }


@pytest.fixture
def directory(directory_body: dict[str, Any]) -> CollectionDirectory:
    """Parsed form of directory_body."""
    return CollectionDirectory.from_dict(directory_body)


def files_metadata(*srcs: str) -> dict[str, Any]:
    """On-chain metadata with one image file per src."""
    return {
        "name": "Asset",
        "files": [
            {"mediaType": "image/png", "name": f"file{i}", "src": src} for i, src in enumerate(srcs)
        ],
    }


# =============================================================================
# In-memory chain index
# =============================================================================


class FakeAssetSource:
    """AssetSource backed by dicts; records every call."""

    def __init__(
        self,
        listing: list[str],
        metadata: dict[str, dict[str, Any] | Exception | None] | None = None,
    ) -> None:
        self.listing = listing
        self.metadata = metadata or {}
        self.listing_calls: list[str] = []
        self.asset_calls: list[str] = []

    def assets_by_policy(self, policy_id: str) -> list[PolicyAsset]:
        self.listing_calls.append(policy_id)
        return [PolicyAsset(asset=a, quantity="1") for a in self.listing]

    def asset(self, asset_id: str) -> AssetMetadata:
        self.asset_calls.append(asset_id)
        value = self.metadata.get(asset_id)
        if isinstance(value, Exception):
            raise value
        return AssetMetadata(asset=asset_id, onchain_metadata=value)


@pytest.fixture
def make_source() -> Callable[..., FakeAssetSource]:
    """Factory for FakeAssetSource instances."""
    return FakeAssetSource


# =============================================================================
# HTTP mocking
# =============================================================================


Route = tuple[int, Any]


def route_transport(
    routes: dict[str, Route | list[Route]],
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """MockTransport answering by URL path.

    A route value is (status, body) or a list of them consumed one per
    request (for paginated endpoints). Bodies that are str are sent raw;
    anything else is JSON-encoded. Unknown paths answer 404.
    """
    queues = {path: list(v) if isinstance(v, list) else None for path, v in routes.items()}

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        path = request.url.path
        if path not in routes:
            return httpx.Response(404, json={"status_code": 404, "message": "Not Found"})
        queue = queues[path]
        status, body = queue.pop(0) if queue is not None else routes[path]
        if isinstance(body, str):
            return httpx.Response(status, content=body.encode())
        return httpx.Response(status, content=json.dumps(body).encode())

    return httpx.MockTransport(handler)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove any policy-scout or Blockfrost variables from the environment."""
    for key in ("PROJECT_ID", "API_URL", "CATALOG_URL", "TIMEOUT", "QUOTA"):
        monkeypatch.delenv(f"POLICY_SCOUT_{key}", raising=False)
    monkeypatch.delenv("BLOCKFROST_PROJECT_ID", raising=False)
    return monkeypatch


@pytest.fixture
def policy_id() -> str:
    """Policy id listed in the directory fixture."""
    return POLICY_ID


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for route_transport mocks."""
    return route_transport


@pytest.fixture
def make_files_metadata() -> Callable[..., dict[str, Any]]:
    """Factory for on-chain metadata carrying a files list."""
    return files_metadata
