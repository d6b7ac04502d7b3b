"""Source normalization, deduplication and the quota gate."""

from __future__ import annotations

from collections.abc import Iterable

from policy_scout.constants import IPFS_PREFIX


def normalize_source(src: str) -> str:
    """Strip one leading ``ipfs://``; anything else is returned verbatim."""
    if src.startswith(IPFS_PREFIX):
        return src[len(IPFS_PREFIX) :]
    return src


def accumulate(sources: Iterable[str], quota: int, into: set[str]) -> bool:
    """Fold ``sources`` into ``into`` until it holds ``quota`` distinct values.

    The quota is checked after each insertion, so the insertion that
    reaches it is the last one made. Duplicates do not use up quota.

    Returns:
        True once the set has reached the quota; the caller stops iterating.
    """
    for src in sources:
        into.add(normalize_source(src))
        if len(into) >= quota:
            return True
    return len(into) >= quota
