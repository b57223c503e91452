import pytest
from scoring import ModalityEvaluator, ScoreAggregator, TEXT_RULES, fixed_jitter
from scoring.text_rules import count_suspicious_patterns, extract_text_facts, uppercase_ratio
from models.results import Verdict


def make_evaluator(jitter: float = 0.0) -> ModalityEvaluator:
    return ModalityEvaluator(TEXT_RULES, aggregator=ScoreAggregator(jitter_source=fixed_jitter(jitter)))


class TestSuspiciousPatterns:

    def test_clean_text_has_no_hits(self):
        assert count_suspicious_patterns("The committee met on Tuesday to review the budget.") == []

    def test_counts_each_occurrence(self):
        hits = dict(count_suspicious_patterns("Urgent! Act now, this is urgent."))
        assert hits["urgency or clickbait phrasing"] == 3

    def test_phrases_are_case_insensitive(self):
        hits = dict(count_suspicious_patterns("VERIFY YOUR ACCOUNT or it will be SUSPENDED"))
        assert hits["account verification phrasing"] == 2

    def test_word_boundaries(self):
        assert count_suspicious_patterns("The prizewinning author spoke") == []

    def test_link_flooding_needs_three_urls(self):
        two = "see http://a.example and https://b.example"
        three = two + " and https://c.example/path"
        assert "link flooding" not in dict(count_suspicious_patterns(two))
        assert dict(count_suspicious_patterns(three))["link flooding"] == 1

    def test_repeated_character_run(self):
        assert dict(count_suspicious_patterns("wow" + "!" * 11))["repeated character run"] == 1
        assert count_suspicious_patterns("wow" + "!" * 10) == []


class TestTextFacts:

    def test_uppercase_ratio_uses_total_length(self):
        assert uppercase_ratio("ABcd") == pytest.approx(0.5)
        assert uppercase_ratio("AB  ") == pytest.approx(0.5)

    def test_uppercase_ratio_of_empty_text(self):
        assert uppercase_ratio("") == 0.0

    def test_length_bounds(self):
        assert extract_text_facts("a" * 19)["length_out_of_range"] is True
        assert extract_text_facts("a b" * 7)["length_out_of_range"] is False
        assert extract_text_facts("ab " * 1666)["length_out_of_range"] is False
        assert extract_text_facts("ab " * 1667)["length_out_of_range"] is True


@pytest.mark.asyncio
class TestTextEvaluation:

    async def test_clickbait_shouting_text(self):
        result = await make_evaluator().evaluate("WIN A FREE PRIZE CLICK HERE NOW!!!!!!!!!!!")

        # three pattern hits, in-range length, caps penalty
        assert result.raw_score == 70 - 30 + 10 - 20
        assert result.raw_score < 70
        assert len(result.findings) >= 3
        assert result.verdict is Verdict.FAKE
        assert result.message == "Text shows signs of manipulation or suspicious patterns"

    async def test_findings_follow_rule_order(self):
        result = await make_evaluator().evaluate("WIN A FREE PRIZE CLICK HERE NOW!!!!!!!!!!!")
        assert result.findings == (
            "Suspicious pattern (urgency or clickbait phrasing): 1 occurrence",
            "Suspicious pattern (prize or lottery phrasing): 1 occurrence",
            "Suspicious pattern (repeated character run): 1 occurrence",
            "Text length within expected range (42 characters)",
            "Excessive capitalization (0.60 of characters uppercase)",
        )

    async def test_ordinary_text_is_authentic(self):
        result = await make_evaluator().evaluate(
            "The city council approved the new library budget after a short debate."
        )
        assert result.raw_score == 80
        assert result.confidence_score == 80.0
        assert result.verdict is Verdict.AUTHENTIC
        assert result.message == "Text appears to be authentic and trustworthy"

    async def test_short_text_penalised(self):
        result = await make_evaluator().evaluate("hello there")
        assert result.raw_score == 60

    async def test_metadata(self):
        result = await make_evaluator().evaluate("WIN A FREE PRIZE CLICK HERE NOW!!!!!!!!!!!")
        assert dict(result.metadata) == {"length": 42, "caps_ratio": 0.6, "patterns_detected": 3}

    async def test_heavy_penalties_clamp_at_zero(self):
        text = "urgent " * 20
        result = await make_evaluator(jitter=10.0).evaluate(text)
        assert result.raw_score < 0
        assert result.confidence_score == 0.0
        assert result.verdict is Verdict.FAKE

    async def test_text_rules_never_probe(self, make_prober):
        from models.probe import ProbeResult
        prober = make_prober(ProbeResult.from_status(200, "text/html"))
        evaluator = ModalityEvaluator(TEXT_RULES, prober=prober)
        await evaluator.evaluate("A perfectly ordinary sentence about gardening.")
        assert prober.calls == []
