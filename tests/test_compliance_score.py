# tests/test_compliance_score.py
"""Tests for the filing compliance score."""

from datetime import date

from gst_compliance.domain.services.compliance_score import (
    SUGGESTION_LATE,
    SUGGESTION_OK,
    SUGGESTION_OVERDUE,
    ScoreWeights,
    is_filed_late,
    is_overdue,
    rating_for,
    score_filings,
)

TODAY = date(2024, 6, 15)


class TestScoreFilings:

    def test_one_overdue_three_on_time(self, make_filing):
        filings = [make_filing("pending", date(2024, 5, 20))] + [
            make_filing("filed", date(2024, m, 20), filed_date=date(2024, m, 18)) for m in (2, 3, 4)
        ]
        result = score_filings(filings, today=TODAY)
        assert result.score == 91
        assert result.rating == "Excellent"
        assert result.overdue_count == 1
        assert result.late_count == 0
        assert result.on_time_count == 3
        assert result.suggestions == [SUGGESTION_OVERDUE]

    def test_no_filings_is_perfect(self):
        result = score_filings([], today=TODAY)
        assert result.score == 100
        assert result.suggestions == [SUGGESTION_OK]

    def test_bonus_is_capped_and_score_clamped_at_100(self, make_filing):
        filings = [
            make_filing("filed", date(2024, 1, 20), filed_date=date(2024, 1, 1)) for _ in range(20)
        ]
        assert score_filings(filings, today=TODAY).score == 100

    def test_score_clamped_at_zero(self, make_filing):
        filings = [make_filing("pending", date(2024, 1, 20)) for _ in range(10)]
        result = score_filings(filings, today=TODAY)
        assert result.score == 0
        assert result.rating == "Poor"

    def test_late_filings_suggest_filing_earlier(self, make_filing):
        filings = [
            make_filing("filed", date(2024, 3, 20), filed_date=date(2024, 3, 25)),
            make_filing("filed", date(2024, 4, 20), filed_date=date(2024, 4, 30)),
        ]
        result = score_filings(filings, today=TODAY)
        assert result.late_count == 2
        assert result.score == 90
        assert result.suggestions == [SUGGESTION_LATE]

    def test_pending_not_yet_due_is_neutral(self, make_filing):
        result = score_filings([make_filing("pending", date(2024, 6, 20))], today=TODAY)
        assert result.overdue_count == 0
        assert result.score == 100

    def test_custom_weights(self, make_filing):
        weights = ScoreWeights(overdue_penalty=40)
        result = score_filings([make_filing("pending", date(2024, 1, 20))], today=TODAY, weights=weights)
        assert result.score == 60
        assert result.rating == "Fair"

    def test_to_dict(self, make_filing):
        data = score_filings([make_filing("pending", date(2024, 1, 20))], today=TODAY).to_dict()
        assert data["score"] == 85
        assert data["rating"] == "Good"
        assert data["overdue_count"] == 1


class TestClassification:

    def test_filed_without_date_is_neither_late_nor_on_time(self, make_filing):
        filing = make_filing("filed", date(2024, 1, 20))
        assert is_filed_late(filing) is False
        assert score_filings([filing], today=TODAY).score == 100

    def test_due_today_is_not_overdue(self, make_filing):
        assert is_overdue(make_filing("pending", TODAY), TODAY) is False

    def test_rating_thresholds(self):
        weights = ScoreWeights()
        assert rating_for(90, weights) == "Excellent"
        assert rating_for(89, weights) == "Good"
        assert rating_for(70, weights) == "Good"
        assert rating_for(50, weights) == "Fair"
        assert rating_for(49, weights) == "Poor"
