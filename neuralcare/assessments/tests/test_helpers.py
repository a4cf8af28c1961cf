from dataclasses import dataclass

from neuralcare.assessments.helpers.history import score_variant
from neuralcare.assessments.helpers.history import with_trends
from neuralcare.assessments.helpers.insights import derive_score_insight


@dataclass
class _Result:
    score: int


class TestScoreVariant:
    def test_thresholds(self):
        assert score_variant(100) == "success"
        assert score_variant(80) == "success"
        assert score_variant(79) == "warning"
        assert score_variant(60) == "warning"
        assert score_variant(59) == "destructive"


class TestWithTrends:
    def test_compares_each_result_with_the_next_older_one(self):
        rows = with_trends([_Result(70), _Result(70), _Result(90), _Result(50)])
        assert [row["trend"] for row in rows] == ["stable", "down", "up", None]

    def test_single_result_has_no_trend(self):
        rows = with_trends([_Result(85)])
        assert rows[0]["trend"] is None
        assert rows[0]["variant"] == "success"

    def test_empty(self):
        assert with_trends([]) == []

    def test_last_row_of_a_page_compares_with_the_next_page(self):
        rows = with_trends([_Result(70), _Result(40)], next_older=_Result(55))
        assert len(rows) == 2
        assert [row["trend"] for row in rows] == ["up", "down"]


class TestDeriveScoreInsight:
    def test_no_previous_score(self):
        assert derive_score_insight(None, 40, 15) is None

    def test_small_drop_is_ignored(self):
        assert derive_score_insight(80, 66, 15) is None

    def test_improvement_is_ignored(self):
        assert derive_score_insight(50, 90, 15) is None

    def test_drop_at_threshold_is_medium(self):
        insight = derive_score_insight(80, 65, 15, test_label="Sequential Memory Test")
        assert insight.severity == "medium"
        assert "15 points" in insight.title
        assert "65/100" in insight.body

    def test_drop_of_twice_threshold_is_high(self):
        insight = derive_score_insight(90, 60, 15)
        assert insight.severity == "high"
