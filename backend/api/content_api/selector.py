from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from content_api.models import ContentVariant


@dataclass(frozen=True)
class Selection:
    variant: ContentVariant
    available_languages: list[str]


def available_languages(variants: Sequence[ContentVariant]) -> list[str]:
    return sorted({v.language_code for v in variants})


def select_variant(
    variants: Sequence[ContentVariant], requested_lang: Optional[str] = None
) -> Selection:
    """
    Pick the variant to display.

    Order: exact match on a non-blank requested language, then the variant
    flagged as default, then the smallest language code.
    """
    if not variants:
        raise ValueError("select_variant needs at least one variant")

    chosen: Optional[ContentVariant] = None

    if requested_lang is not None and requested_lang.strip():
        chosen = next((v for v in variants if v.language_code == requested_lang), None)

    if chosen is None:
        chosen = next((v for v in variants if v.is_default_lang), None)

    if chosen is None:
        chosen = min(variants, key=lambda v: v.language_code)

    return Selection(variant=chosen, available_languages=available_languages(variants))
