"""Builds a randomized quiz from a topic's raw questions."""

from __future__ import annotations

import random
from typing import Sequence

from pm_quiz.core.models import QuizQuestion, RawQuestion


def build_quiz(
    raw_questions: Sequence[RawQuestion],
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    """Shuffle question order and each question's options.

    Every call draws from ``rng`` (a fresh unseeded ``random.Random`` when
    omitted), so repeated builds of the same topic are independent.
    """
    rng = rng or random.Random()

    ordered = list(raw_questions)
    rng.shuffle(ordered)
    return [_shuffle_options(question, rng) for question in ordered]


def _shuffle_options(question: RawQuestion, rng: random.Random) -> QuizQuestion:
    # Index 0 is the correct option before shuffling.
    combined = list(enumerate([question.correct, *question.wrong]))
    rng.shuffle(combined)

    options = [text for _, text in combined]
    answer_index = next(pos for pos, (original, _) in enumerate(combined) if original == 0)
    return QuizQuestion(
        prompt=question.prompt,
        options=options,
        answer_index=answer_index,
        explanation=question.explanation,
    )
