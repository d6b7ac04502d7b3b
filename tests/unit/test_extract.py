"""Tests for extracting file sources from on-chain metadata."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from policy_scout.errors import ResponseParseError
from policy_scout.extract import extract_sources, files_from_metadata
from policy_scout.models import AssetMetadata


class TestFilesFromMetadata:
    """Parsing of the optional files list."""

    @pytest.mark.unit
    def test_no_metadata(self) -> None:
        """An asset without on-chain metadata has no files."""
        assert files_from_metadata(AssetMetadata("A1", None)) == []

    @pytest.mark.unit
    def test_metadata_without_files(self) -> None:
        """Metadata lacking a files key has no files."""
        assert files_from_metadata(AssetMetadata("A1", {"name": "One", "image": "ipfs://Qm"})) == []

    @pytest.mark.unit
    def test_empty_files(self) -> None:
        """An empty files list is valid."""
        assert files_from_metadata(AssetMetadata("A1", {"files": []})) == []

    @pytest.mark.unit
    @pytest.mark.parametrize("files", [{"src": "ipfs://Qm"}, "ipfs://Qm", None])
    def test_files_not_a_list(self, files: Any) -> None:
        """A files value that is present but not a list is a parse error."""
        with pytest.raises(ResponseParseError) as exc_info:
            files_from_metadata(AssetMetadata("A1", {"files": files}))

        assert exc_info.value.asset_id == "A1"
        assert exc_info.value.stage == "metadata"

    @pytest.mark.unit
    def test_bad_entry_is_located(self) -> None:
        """The failing entry index appears in the reason."""
        metadata = AssetMetadata(
            "A1",
            {
                "files": [
                    {"mediaType": "image/png", "name": "a", "src": "ipfs://Qm1"},
                    {"mediaType": "image/png", "name": "b"},
                ]
            },
        )

        with pytest.raises(ResponseParseError) as exc_info:
            files_from_metadata(metadata)

        assert "files[1]" in exc_info.value.reason


class TestExtractSources:
    """Fetch plus extract for one asset."""

    @pytest.mark.unit
    def test_returns_raw_srcs_in_order(
        self,
        make_source: Callable[..., Any],
        make_files_metadata: Callable[..., dict[str, Any]],
    ) -> None:
        """Sources keep their prefix and metadata order; duplicates are kept."""
        source = make_source(
            [], {"A1": make_files_metadata("ipfs://Qm2", "https://x/y.png", "ipfs://Qm2")}
        )

        assert extract_sources(source, "A1") == ["ipfs://Qm2", "https://x/y.png", "ipfs://Qm2"]
        assert source.asset_calls == ["A1"]

    @pytest.mark.unit
    def test_asset_without_metadata(self, make_source: Callable[..., Any]) -> None:
        """Assets with no metadata contribute nothing."""
        assert extract_sources(make_source([], {"A1": None}), "A1") == []
