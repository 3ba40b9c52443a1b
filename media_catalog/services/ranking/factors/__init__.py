"""Boost factors, evaluated in order. Each returns a (name, multiplier >= 1) pair or None."""

from media_catalog.services.ranking.factors.base import BoostContext, Factor, FactorFn
from media_catalog.services.ranking.factors.field_match import description_factor, title_factor
from media_catalog.services.ranking.factors.format_match import format_factor
from media_catalog.services.ranking.factors.intent import intent_factor
from media_catalog.services.ranking.factors.keywords import keyword_factor
from media_catalog.services.ranking.factors.platform import platform_factor
from media_catalog.services.ranking.factors.recency import recency_factor
from media_catalog.services.ranking.factors.transcription import transcription_factor
from media_catalog.services.ranking.factors.type_match import type_factor

FACTOR_REGISTRY: list[FactorFn] = [
    type_factor,
    platform_factor,
    title_factor,
    description_factor,
    format_factor,
    keyword_factor,
    intent_factor,
    transcription_factor,
    recency_factor,
]

__all__ = ["BoostContext", "Factor", "FactorFn", "FACTOR_REGISTRY"]
