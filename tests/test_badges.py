import unittest

from pm_quiz.core.badges import badge_for_percent, compute_percent


class BadgeTests(unittest.TestCase):
    def test_thresholds(self) -> None:
        cases = {
            100: "PM Ace",
            90: "PM Ace",
            89: "Strong Builder",
            75: "Strong Builder",
            74: "Solid Start",
            50: "Solid Start",
            49: "Keep Going",
            0: "Keep Going",
        }
        for percent, label in cases.items():
            with self.subTest(percent=percent):
                self.assertEqual(badge_for_percent(percent).label, label)

    def test_badge_carries_emoji_and_tone(self) -> None:
        badge = badge_for_percent(95)
        self.assertEqual(badge.emoji, "🏆")
        self.assertEqual(badge.tone, "amber")
        self.assertEqual(badge_for_percent(10).tone, "slate")


class ComputePercentTests(unittest.TestCase):
    def test_rounds_to_nearest_integer(self) -> None:
        self.assertEqual(compute_percent(2, 3), 67)
        self.assertEqual(compute_percent(1, 3), 33)
        self.assertEqual(compute_percent(15, 15), 100)

    def test_halves_round_up(self) -> None:
        self.assertEqual(compute_percent(1, 8), 13)
        self.assertEqual(compute_percent(1, 200), 1)

    def test_zero_total_is_zero(self) -> None:
        self.assertEqual(compute_percent(0, 0), 0)


if __name__ == "__main__":
    unittest.main()
