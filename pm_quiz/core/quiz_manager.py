"""Business logic facade shared between the API and the quiz services."""

from __future__ import annotations

import random
from threading import Lock

from pm_quiz.constants.quiz_constants import HISTORY_DISPLAY_LIMIT
from pm_quiz.core.markdown_renderer import renderer
from pm_quiz.core.models import (
    Attempt,
    QuestionView,
    ResultView,
    ReviewItem,
    SessionState,
    SessionView,
    Topic,
    TopicSummary,
)
from pm_quiz.core.services.attempt_store import AttemptStore
from pm_quiz.core.services.quiz_session import Clock, QuizSession, utc_now
from pm_quiz.core.services.topic_catalog import TopicCatalog


class QuizManager:
    """Facade for quiz services: TopicCatalog, QuizSession and AttemptStore."""

    def __init__(
        self,
        topics: list[Topic],
        store: AttemptStore,
        rng: random.Random | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._lock = Lock()

        # Services
        self._catalog = TopicCatalog(topics)
        self._store = store
        self._session = QuizSession(self._catalog, store, rng=rng, clock=clock)

        default_topic = self._catalog.default_topic_id()
        if default_topic is not None:
            self._session.select_topic(default_topic)

    # --- Topic Catalog Delegation ---

    def list_topics(self, query: str = "") -> list[TopicSummary]:
        with self._lock:
            return self._catalog.list_summaries(query)

    def get_topic_count(self) -> int:
        with self._lock:
            return self._catalog.get_topic_count()

    # --- Session Delegation ---

    def select_topic(self, topic_id: str | None) -> None:
        with self._lock:
            self._session.select_topic(topic_id)

    def start_quiz(self) -> bool:
        with self._lock:
            return self._session.start()

    def retry_quiz(self) -> bool:
        return self.start_quiz()

    def select_option(self, option_index: int) -> bool:
        with self._lock:
            return self._session.select_option(option_index)

    def go_back(self) -> bool:
        with self._lock:
            return self._session.go_back()

    def go_next(self) -> Attempt | None:
        with self._lock:
            return self._session.go_next()

    def return_to_start(self) -> None:
        with self._lock:
            self._session.return_to_start()

    def get_state(self) -> SessionState:
        with self._lock:
            return self._session.state

    def get_selected_topic_id(self) -> str | None:
        with self._lock:
            return self._session.topic_id

    # --- Attempt Store Delegation ---

    def get_topic_history(
        self,
        topic_id: str | None = None,
        limit: int | None = HISTORY_DISPLAY_LIMIT,
    ) -> list[Attempt]:
        with self._lock:
            return self._history_for(topic_id or self._session.topic_id, limit)

    def get_all_attempts(self) -> list[Attempt]:
        with self._lock:
            return self._store.load()

    # --- Read Models ---

    def get_session_view(self) -> SessionView:
        with self._lock:
            topic_id = self._session.topic_id
            topic = self._catalog.get_summary(topic_id) if topic_id is not None else None
            return SessionView(
                state=self._session.state,
                topic=topic,
                question=self._build_question_view(),
                result=self._build_result_view(),
                history=self._history_for(topic_id, HISTORY_DISPLAY_LIMIT),
            )

    def _history_for(self, topic_id: str | None, limit: int | None) -> list[Attempt]:
        if topic_id is None:
            return []
        return self._store.attempts_for_topic(topic_id, limit)

    def _build_question_view(self) -> QuestionView | None:
        question = self._session.get_current_question()
        if question is None:
            return None
        index = self._session.index
        total = self._session.total
        return QuestionView(
            index=index,
            total=total,
            prompt=question.prompt,
            prompt_html=renderer.render_inline(question.prompt),
            options=list(question.options),
            selected_option=self._session.selected_option,
            progress_percent=self._session.progress_percent(),
            is_last=index == total - 1,
        )

    def _build_result_view(self) -> ResultView | None:
        if self._session.state is not SessionState.COMPLETED:
            return None
        answers = self._session.get_answers()
        review = [
            ReviewItem(
                prompt=question.prompt,
                options=list(question.options),
                answer_index=question.answer_index,
                chosen_index=answers[position],
                explanation_html=renderer.render_fragment(question.explanation),
            )
            for position, question in enumerate(self._session.get_questions())
        ]
        return ResultView(
            score=self._session.score(),
            total=self._session.total,
            percent=self._session.percent(),
            badge=self._session.badge(),
            review=review,
        )
