"""Relevance booster and its individual factors."""

import pytest

from media_catalog.config.engine.models import BoostSettings
from media_catalog.models.media import MediaType
from media_catalog.services.ranking.booster import boost, combine
from media_catalog.services.ranking.factors import BoostContext
from media_catalog.services.ranking.factors.field_match import title_factor
from media_catalog.services.ranking.factors.format_match import format_factor, format_name
from media_catalog.services.ranking.factors.intent import detect_intent
from media_catalog.services.ranking.factors.keywords import keyword_factor
from media_catalog.services.ranking.factors.platform import detect_platform, platform_factor
from media_catalog.services.ranking.factors.recency import recency_multiplier
from media_catalog.services.ranking.factors.transcription import transcription_factor
from media_catalog.services.ranking.factors.type_match import type_factor
from media_catalog.services.ranking.text import meaningful_words
from media_catalog.utils.time import utc_now
from tests.conftest import make_record

CFG = BoostSettings()


def _ctx(record, query: str) -> BoostContext:
    q = query.lower()
    return BoostContext(record, q, meaningful_words(q), utc_now())


@pytest.fixture
def lecture_video():
    return make_record(
        "Neural Networks Explained",
        MediaType.VIDEO,
        description="A walkthrough of backpropagation",
        content="Transcription: today we explain neural networks from scratch",
        source_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        mime_type="video/mp4",
    )


def test_text_records_are_not_boosted():
    record = make_record("Video editing guide", MediaType.TEXT)
    outcome = boost(record, "video editing guide", 0.6, CFG)
    assert outcome.similarity == 0.6
    assert outcome.trace == []


def test_below_minimum_similarity_is_left_alone(lecture_video):
    outcome = boost(lecture_video, "youtube video neural networks", 0.05, CFG)
    assert outcome.similarity == 0.05
    assert outcome.trace == []


def test_no_matching_factor_leaves_score_unchanged():
    record = make_record("Cooking pasta", MediaType.VIDEO, age_days=60)
    outcome = boost(record, "quantum chromodynamics", 0.55, CFG)
    assert outcome.similarity == 0.55
    assert outcome.trace == []


def test_many_factors_hit_the_total_boost_cap(lecture_video):
    query = "youtube video neural networks mp4 tutorial"
    outcome = boost(lecture_video, query, 0.6, CFG)
    assert outcome.similarity == pytest.approx(0.6 * CFG.max_total_boost)
    names = [name for name, _ in outcome.trace]
    assert "type:exact" in names
    assert "platform:youtube" in names
    assert "format:mp4" in names
    assert "intent:tutorial" in names


def test_boosted_similarity_never_exceeds_one(lecture_video):
    outcome = boost(lecture_video, "youtube video neural networks mp4 tutorial", 0.8, CFG)
    assert outcome.similarity == 1.0


@pytest.mark.parametrize("base", [0.15, 0.4, 0.7, 0.95])
@pytest.mark.parametrize(
    "query",
    ["neural networks", "youtube video", "podcast", "", "mp4 clip review", "something unrelated"],
)
def test_boost_stays_within_bounds(lecture_video, base, query):
    outcome = boost(lecture_video, query, base, CFG)
    assert base <= outcome.similarity <= min(1.0, base * CFG.max_total_boost) + 1e-9
    assert all(factor >= 1.0 for _, factor in outcome.trace)


def test_sink_receives_trace(lecture_video):
    calls = []
    outcome = boost(lecture_video, "video", 0.5, CFG, sink=lambda *args: calls.append(args))
    assert len(calls) == 1
    record, base, final, trace = calls[0]
    assert record.id == lecture_video.id
    assert base == 0.5
    assert final == outcome.similarity
    assert trace == outcome.trace


def test_combination_modes_agree_below_the_cap():
    additive = CFG.model_copy(update={"combination": "additive"})
    assert combine(0.5, 1.2, CFG) == pytest.approx(0.6)
    assert combine(0.5, 1.2, additive) == pytest.approx(0.6)
    assert combine(0.5, 3.0, additive) == pytest.approx(0.75)


def test_type_synonym():
    record = make_record("History hour", MediaType.AUDIO)
    assert type_factor(_ctx(record, "podcast about history"), CFG) == ("type:synonym", CFG.type_match_boost)


def test_platform_alias(lecture_video):
    assert detect_platform(lecture_video.source_url) == "youtube"
    assert platform_factor(_ctx(lecture_video, "yt lecture"), CFG) == ("platform:youtube", CFG.platform_match_boost)


def test_title_tiers(lecture_video):
    assert title_factor(_ctx(lecture_video, "networks neural"), CFG) == ("title:all_words", CFG.title_match_boost)
    name, factor = title_factor(_ctx(lecture_video, "neural networks and deep learning"), CFG)
    assert name == "title:some_words"
    assert factor == pytest.approx(1.0 + (CFG.title_match_boost - 1.0) * CFG.partial_field_ratio)
    assert title_factor(_ctx(lecture_video, ""), CFG) is None


def test_format_from_mime_and_extension():
    assert format_name("audio/mpeg") == "mp3"
    assert format_name(None, "https://cdn.example.com/talk.webm") == "webm"
    record = make_record("Keynote", MediaType.VIDEO, source_url="https://cdn.example.com/talk.webm")
    assert format_factor(_ctx(record, "webm recording"), CFG) == ("format:webm", CFG.metadata_match_boost)


def test_keyword_strength_grows_with_matches():
    record = make_record("Highlights", MediaType.VIDEO)
    name, factor = keyword_factor(_ctx(record, "video clip"), CFG)
    assert name == "keywords:3"
    assert factor == pytest.approx(1.0 + (CFG.keywords_boost - 1.0) * 0.95)


def test_music_intent_only_for_audio():
    assert detect_intent("new album", "audio") == "music"
    assert detect_intent("new album", "video") is None
    assert detect_intent("how to bake bread", "video") == "tutorial"


def test_transcription_phrase_match(lecture_video):
    assert transcription_factor(_ctx(lecture_video, "neural networks"), CFG) == (
        "transcription:exact_phrase",
        pytest.approx(CFG.phrase_match_boost),
    )
    assert transcription_factor(_ctx(lecture_video, "   "), CFG) is None


def test_recency_decays_linearly():
    assert recency_multiplier(0, CFG) == pytest.approx(CFG.recency_boost_multiplier)
    assert recency_multiplier(15, CFG) == pytest.approx(1.025)
    assert recency_multiplier(45, CFG) == 1.0
