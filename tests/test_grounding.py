"""
Tests for the grounding gate and its settings.
"""
import pytest

from docs_rag.core.config import DEFAULT_MIN_SIMILARITY, Settings
from docs_rag.models.record import ScoredRecord
from docs_rag.services.grounding import REFUSAL_ANSWER, GroundingGate, refusal


def scored(rid: str, score: float) -> ScoredRecord:
    return ScoredRecord(id=rid, source="s", embedding=[1.0], content="c", score=score)


class TestGroundingGate:
    """Test the answer/refuse decision."""

    def test_empty_results_refused(self):
        assert GroundingGate(0.25).should_answer([]) is False

    def test_below_threshold_refused(self):
        assert GroundingGate(0.25).should_answer([scored("a", 0.2499)]) is False

    def test_at_threshold_answered(self):
        assert GroundingGate(0.25).should_answer([scored("a", 0.25)]) is True

    def test_only_best_score_matters(self):
        assert GroundingGate(0.5).should_answer([scored("a", 0.9), scored("b", 0.1)]) is True

    def test_default_threshold_from_settings(self):
        assert GroundingGate().min_similarity == pytest.approx(0.25)

    def test_refusal_shape(self):
        res = refusal()
        assert res.answer == REFUSAL_ANSWER
        assert res.citations == []


class TestThresholdSetting:
    """Test RAG_MIN_SIMILARITY parsing."""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("RAG_MIN_SIMILARITY", "0.4")
        assert Settings(_env_file=None).RAG_MIN_SIMILARITY == pytest.approx(0.4)

    @pytest.mark.parametrize("raw", ["", "abc", "nan", "inf"])
    def test_bad_values_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("RAG_MIN_SIMILARITY", raw)
        assert Settings(_env_file=None).RAG_MIN_SIMILARITY == DEFAULT_MIN_SIMILARITY
