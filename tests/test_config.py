"""Engine and embedding profiles."""

import pytest
from pydantic import ValidationError

from media_catalog.config.embedding.static import resolve_embedding_config
from media_catalog.config.engine.models import EngineConfig, RecommendationSettings, SimilaritySettings
from media_catalog.config.engine.static import resolve_engine_config


def test_default_engine_values():
    cfg = EngineConfig()
    assert cfg.similarity.progressive_thresholds == (0.2, 0.1, 0.05, 0.0)
    assert cfg.recommendations.progressive_thresholds == (0.4, 0.3, 0.2, 0.1, 0.05, 0.0)
    assert cfg.boosts.max_total_boost == 1.5
    assert cfg.similarity_threshold("strict") == 0.7
    assert cfg.max_distance("l2") == 1.0
    assert cfg.max_distance("cosine") == 0.5


def test_limits_and_similarity_are_clamped():
    cfg = EngineConfig()
    assert cfg.validate_limit(0) == 1
    assert cfg.validate_limit(1000) == 100
    assert cfg.validate_similarity(1.7) == 1.0
    assert cfg.validate_similarity(-0.2) == 0.0


def test_relaxation_sequences_must_decrease():
    with pytest.raises(ValidationError):
        SimilaritySettings(progressive_thresholds=(0.1, 0.2))
    with pytest.raises(ValidationError):
        RecommendationSettings(progressive_thresholds=(0.3, 0.3))


def test_engine_config_is_immutable():
    cfg = EngineConfig()
    with pytest.raises(ValidationError):
        cfg.boosts.max_total_boost = 2.0


def test_profile_overrides_merge_nested_sections():
    strict = resolve_engine_config("strict")
    assert strict.similarity.default_min_similarity == 0.5
    assert strict.similarity.strict_min_similarity == 0.7
    tuned = resolve_engine_config("default", {"boosts": {"max_total_boost": 1.2}})
    assert tuned.boosts.max_total_boost == 1.2
    assert tuned.boosts.title_match_boost == 1.2
    assert resolve_engine_config("additive_boosts").boosts.combination == "additive"


def test_unknown_profiles_raise():
    with pytest.raises(ValueError):
        resolve_engine_config("no-such-profile")
    with pytest.raises(ValueError):
        resolve_embedding_config("no-such-profile")


def test_strategy_names_resolve_to_default_profiles():
    cfg = resolve_embedding_config("mock")
    assert cfg.strategy == "mock"
    assert cfg.rate_limit_delay_ms == 0
    assert resolve_embedding_config("bedrock").dimension == 1024


def test_mongo_collection_name_comes_from_settings(monkeypatch):
    from media_catalog.config.settings import get_settings
    from media_catalog.config.storage.mongo import get_mongo_config, media_collection_name

    assert media_collection_name() == "media_items"
    monkeypatch.setenv("MONGO_MEDIA_COLLECTION", "catalog_items")
    get_settings.cache_clear()
    assert get_mongo_config()["media_collection"] == "catalog_items"
