"""Chain index client (Blockfrost REST API).

Two operations are consumed: listing the assets minted under a policy and
fetching one asset's detail. Both authenticate with a ``project_id``
header. The network is inferred from the project id prefix unless an
explicit API root is configured.

The pipeline depends on the AssetSource protocol rather than on
ChainIndexClient, so tests can substitute in-memory sources.

Example:
    with JsonClient(timeout=30) as http:
        chain = ChainIndexClient(http, project_id="mainnetXXXX")
        for row in chain.assets_by_policy(policy_id):
            print(row.asset)
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from policy_scout.constants import (
    CHAIN_API_URLS,
    DEFAULT_NETWORK,
    PAGE_SIZE,
    STAGE_ENUMERATE,
    STAGE_METADATA,
)
from policy_scout.errors import ResponseParseError
from policy_scout.http import JsonClient
from policy_scout.models import AssetMetadata, PolicyAsset

logger = logging.getLogger(__name__)


@runtime_checkable
class AssetSource(Protocol):
    """What the pipeline needs from a chain index."""

    def assets_by_policy(self, policy_id: str) -> list[PolicyAsset]:
        """Return every asset listed under ``policy_id``, in service order."""
        ...

    def asset(self, asset_id: str) -> AssetMetadata:
        """Return the detail of one asset."""
        ...


def api_url_for_project(project_id: str) -> str:
    """Pick the API root matching the network encoded in a project id.

    >>> api_url_for_project("preprodAbc123")
    'https://cardano-preprod.blockfrost.io/api/v0'
    """
    for network, url in CHAIN_API_URLS.items():
        if project_id.startswith(network):
            return url
    return CHAIN_API_URLS[DEFAULT_NETWORK]


class ChainIndexClient:
    """Blockfrost-backed AssetSource."""

    def __init__(
        self,
        http: JsonClient,
        project_id: str,
        *,
        api_url: str | None = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self._http = http
        self._headers = {"project_id": project_id}
        self._api_url = (api_url or api_url_for_project(project_id)).rstrip("/")
        self._page_size = page_size

    @property
    def api_url(self) -> str:
        return self._api_url

    def assets_by_policy(self, policy_id: str) -> list[PolicyAsset]:
        """List all assets of a policy, walking pages until a short page."""
        url = f"{self._api_url}/assets/policy/{policy_id}"
        assets: list[PolicyAsset] = []
        page = 1
        while True:
            body = self._http.get_json(
                url,
                stage=STAGE_ENUMERATE,
                params={"page": page, "count": self._page_size},
                headers=self._headers,
            )
            if not isinstance(body, list):
                raise ResponseParseError(
                    url, f"expected a list, got {type(body).__name__}", STAGE_ENUMERATE
                )
            for index, row in enumerate(body):
                try:
                    assets.append(PolicyAsset.from_dict(row))
                except ValueError as err:
                    raise ResponseParseError(
                        url, f"page {page} entry {index}: {err}", STAGE_ENUMERATE
                    ) from err

            logger.debug("Policy %s page %d: %d assets", policy_id, page, len(body))
            if len(body) < self._page_size:
                break
            page += 1
        return assets

    def asset(self, asset_id: str) -> AssetMetadata:
        """Fetch the detail of one asset."""
        url = f"{self._api_url}/assets/{asset_id}"
        body = self._http.get_json(url, stage=STAGE_METADATA, headers=self._headers)
        try:
            return AssetMetadata.from_dict(body, asset=asset_id)
        except ValueError as err:
            raise ResponseParseError(url, str(err), STAGE_METADATA, asset_id=asset_id) from err
