from unittest import TestCase

from goals.visualizations import month_score_chart


class MonthScoreChartTests(TestCase):
    def test_one_bar_per_goal(self):
        fig = month_score_chart({"material": 80, "ego": 60, "running": 100}, "2026-06")
        bar = fig.data[0]
        self.assertEqual(list(bar.x), ["Less Material Focus", "Less Ego-led", "Build My Running Career"])
        self.assertEqual(list(bar.y), [80, 60, 100])
        self.assertEqual(list(bar.text), ["80%", "60%", "100%"])
        self.assertEqual(fig.layout.title.text, "Month score (2026-06)")

    def test_missing_summary_draws_zeroes(self):
        fig = month_score_chart(None, "2026-07")
        self.assertEqual(list(fig.data[0].y), [0, 0, 0])
