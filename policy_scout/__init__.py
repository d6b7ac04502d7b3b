"""policy-scout - Collect image sources for an NFT policy from its on-chain metadata."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("policy-scout")
except PackageNotFoundError:
    __version__ = "0.0.0+dev"

from policy_scout.errors import ScoutError  # noqa: E402
from policy_scout.pipeline import HarvestResult, collect_image_sources  # noqa: E402

__all__ = [
    "HarvestResult",
    "ScoutError",
    "__version__",
    "collect_image_sources",
]
