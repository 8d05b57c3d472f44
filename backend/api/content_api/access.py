from __future__ import annotations

import logging
from typing import Any, Collection, Mapping

from content_api.errors import Forbidden

logger = logging.getLogger(__name__)


def regions_of(claims: Mapping[str, Any]) -> set[str]:
    """
    Regions the caller may act on.

    Reads the "regions" claim (list of codes) first and falls back to the
    singular "region" claim. No claim means no regions.
    """
    regions = claims.get("regions")
    if isinstance(regions, str):
        return {regions}
    if isinstance(regions, (list, tuple, set, frozenset)):
        return {str(r) for r in regions}

    region = claims.get("region")
    if region is None:
        return set()
    return {str(region)}


def enforce_region(content_region: str, caller_regions: Collection[str]) -> None:
    if not caller_regions or content_region not in caller_regions:
        logger.warning(
            "Region access denied: region=%s caller_regions=%s",
            content_region,
            sorted(caller_regions or []),
        )
        raise Forbidden("not allowed to access this region")
