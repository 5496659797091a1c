import random
import unittest

from pm_quiz.core.models import RawQuestion
from pm_quiz.core.quiz_builder import build_quiz


def _raw_questions() -> list[RawQuestion]:
    return [
        RawQuestion(
            prompt=f"Question {n}?",
            correct=f"right {n}",
            wrong=(f"wrong {n}a", f"wrong {n}b", f"wrong {n}c"),
            explanation=f"Because {n}.",
        )
        for n in range(6)
    ]


class BuildQuizTests(unittest.TestCase):
    def test_options_keep_the_same_texts(self) -> None:
        raw = _raw_questions()
        by_prompt = {question.prompt: question for question in raw}
        for seed in range(25):
            for built in build_quiz(raw, random.Random(seed)):
                source = by_prompt[built.prompt]
                self.assertEqual(sorted(built.options), sorted([source.correct, *source.wrong]))

    def test_answer_index_points_at_correct_text(self) -> None:
        raw = _raw_questions()
        by_prompt = {question.prompt: question for question in raw}
        for seed in range(25):
            for built in build_quiz(raw, random.Random(seed)):
                self.assertEqual(built.options[built.answer_index], by_prompt[built.prompt].correct)
                self.assertEqual(built.explanation, by_prompt[built.prompt].explanation)

    def test_every_question_appears_once(self) -> None:
        raw = _raw_questions()
        for seed in range(10):
            built = build_quiz(raw, random.Random(seed))
            self.assertEqual(sorted(q.prompt for q in built), sorted(q.prompt for q in raw))

    def test_same_seed_gives_same_quiz(self) -> None:
        raw = _raw_questions()
        self.assertEqual(build_quiz(raw, random.Random(7)), build_quiz(raw, random.Random(7)))

    def test_input_is_not_reordered(self) -> None:
        raw = _raw_questions()
        snapshot = list(raw)
        build_quiz(raw, random.Random(3))
        self.assertEqual(raw, snapshot)

    def test_question_without_wrong_options(self) -> None:
        lone = RawQuestion(prompt="Only one?", correct="yes", wrong=())
        built = build_quiz([lone])
        self.assertEqual(built[0].options, ["yes"])
        self.assertEqual(built[0].answer_index, 0)

    def test_empty_bank_builds_empty_quiz(self) -> None:
        self.assertEqual(build_quiz([]), [])

    def test_unseeded_builds_are_each_valid(self) -> None:
        raw = _raw_questions()
        for built in (build_quiz(raw), build_quiz(raw)):
            self.assertEqual(len(built), len(raw))
            for question in built:
                self.assertEqual(question.options[question.answer_index].split()[0], "right")


class RawQuestionTests(unittest.TestCase):
    def test_correct_text_may_not_repeat_as_wrong(self) -> None:
        with self.assertRaises(ValueError):
            RawQuestion(prompt="Q?", correct="a", wrong=("b", "a"))

    def test_duplicate_wrong_options_rejected(self) -> None:
        with self.assertRaises(ValueError):
            RawQuestion(prompt="Q?", correct="a", wrong=("b", "b"))


if __name__ == "__main__":
    unittest.main()
