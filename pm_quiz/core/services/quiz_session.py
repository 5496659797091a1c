"""Service for driving one user's quiz run from topic selection to result."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import random
from typing import Callable

from pm_quiz.core.badges import badge_for_percent, compute_percent
from pm_quiz.core.models import Attempt, Badge, QuizQuestion, SessionState
from pm_quiz.core.quiz_builder import build_quiz
from pm_quiz.core.services.attempt_store import AttemptStore
from pm_quiz.core.services.topic_catalog import TopicCatalog

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_ALLOWED_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset({SessionState.IDLE, SessionState.READY}),
    SessionState.READY: frozenset(
        {SessionState.IDLE, SessionState.READY, SessionState.IN_PROGRESS}
    ),
    SessionState.IN_PROGRESS: frozenset(
        {SessionState.IDLE, SessionState.READY, SessionState.IN_PROGRESS, SessionState.COMPLETED}
    ),
    SessionState.COMPLETED: frozenset(
        {SessionState.IDLE, SessionState.READY, SessionState.IN_PROGRESS}
    ),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    iso = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")


class QuizSession:
    """State machine for a single quiz run.

    Idle -> Ready (topic selected) -> InProgress -> Completed. ``start`` may
    be called again from InProgress or Completed to retry with a fresh
    shuffle. Selecting a topic always discards the current run.
    """

    def __init__(
        self,
        catalog: TopicCatalog,
        store: AttemptStore,
        rng: random.Random | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._rng = rng or random.Random()
        self._clock = clock

        self._state = SessionState.IDLE
        self._topic_id: str | None = None
        self._questions: list[QuizQuestion] = []
        self._index: int = 0
        self._selected_option: int | None = None
        self._answers: list[int | None] = []
        self._last_attempt: Attempt | None = None

    # --- Transitions ---

    def select_topic(self, topic_id: str | None) -> None:
        """Select a topic (or clear it with ``None``) and discard any run."""
        if topic_id is not None and not self._catalog.has_topic(topic_id):
            raise KeyError(f"Unknown topic '{topic_id}'")
        self._topic_id = topic_id
        self._reset_run()
        self._transition(SessionState.READY if topic_id is not None else SessionState.IDLE)
        logger.info("Selected topic %s", topic_id)

    def start(self) -> bool:
        """Build a freshly shuffled quiz for the selected topic.

        Returns False without changing state when no topic is selected.
        """
        if self._topic_id is None:
            return False
        topic = self._catalog.get_topic(self._topic_id)
        self._reset_run()
        self._questions = build_quiz(topic.questions, self._rng)
        self._answers = [None] * len(self._questions)
        self._transition(SessionState.IN_PROGRESS)
        logger.info("Started quiz for %s with %d question(s)", topic.id, len(self._questions))

        if not self._questions:
            self._finish()
        return True

    def select_option(self, option_index: int) -> bool:
        """Record a tentative answer for the current question."""
        if self._state is not SessionState.IN_PROGRESS:
            return False
        option_count = len(self._questions[self._index].options)
        if not 0 <= option_index < option_count:
            raise ValueError(f"Option index {option_index} out of range (0-{option_count - 1}).")
        self._selected_option = option_index
        return True

    def go_back(self) -> bool:
        if self._state is not SessionState.IN_PROGRESS or self._index == 0:
            return False
        self._index -= 1
        previous = self._answers[self._index]
        if previous is None:
            raise RuntimeError(f"No committed answer for question {self._index}.")
        self._selected_option = previous
        return True

    def go_next(self) -> Attempt | None:
        """Commit the tentative answer and advance, finishing on the last question.

        Returns the Attempt when this call completes the quiz.
        """
        if self._state is not SessionState.IN_PROGRESS or self._selected_option is None:
            return None

        self._answers[self._index] = self._selected_option
        if self._index == len(self._questions) - 1:
            return self._finish()

        self._index += 1
        self._selected_option = None
        self._transition(SessionState.IN_PROGRESS)
        return None

    def return_to_start(self) -> None:
        """Leave the result screen and wait for the next start on the same topic."""
        if self._state is not SessionState.COMPLETED:
            return
        self._reset_run()
        self._transition(SessionState.READY)

    # --- Read model ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def topic_id(self) -> str | None:
        return self._topic_id

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def selected_option(self) -> int | None:
        return self._selected_option

    @property
    def last_attempt(self) -> Attempt | None:
        return self._last_attempt

    def get_questions(self) -> list[QuizQuestion]:
        return list(self._questions)

    def get_answers(self) -> list[int | None]:
        return list(self._answers)

    def get_current_question(self) -> QuizQuestion | None:
        if self._state is not SessionState.IN_PROGRESS or not self._questions:
            return None
        return self._questions[self._index]

    def progress_percent(self) -> int:
        return compute_percent(self._index + 1, self.total)

    def score(self) -> int:
        """Count committed answers matching each question's answer index."""
        return sum(
            1
            for answer, question in zip(self._answers, self._questions)
            if answer == question.answer_index
        )

    def percent(self) -> int:
        return compute_percent(self.score(), self.total)

    def badge(self) -> Badge:
        return badge_for_percent(self.percent())

    # --- Internals ---

    def _finish(self) -> Attempt:
        topic = self._catalog.get_topic(self._topic_id)
        score = self.score()
        percent = compute_percent(score, self.total)
        attempt = Attempt(
            topic_id=topic.id,
            topic_title=topic.title,
            score=score,
            total=self.total,
            percent=percent,
            timestamp_iso=format_timestamp(self._clock()),
            badge=badge_for_percent(percent).label,
        )
        self._store.save(attempt)
        self._last_attempt = attempt
        self._selected_option = None
        self._transition(SessionState.COMPLETED)
        logger.info("Finished %s: %d/%d (%d%%)", topic.id, score, self.total, percent)
        return attempt

    def _reset_run(self) -> None:
        self._questions = []
        self._index = 0
        self._selected_option = None
        self._answers = []
        self._last_attempt = None

    def _transition(self, target: SessionState) -> None:
        if target not in _ALLOWED_TRANSITIONS[self._state]:
            raise RuntimeError(f"Illegal session transition {self._state.name} -> {target.name}.")
        self._state = target
