"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True, slots=True)
class RawQuestion:
    """Authoring-time question with an explicit correct answer."""

    prompt: str
    correct: str
    wrong: tuple[str, ...]
    explanation: str = ""

    def __post_init__(self) -> None:
        if not self.prompt.strip():
            raise ValueError("Question prompt must not be empty.")
        if not self.correct.strip():
            raise ValueError("Correct answer text must not be empty.")
        if self.correct in self.wrong:
            raise ValueError(f"Correct answer duplicated among wrong options: {self.prompt!r}")
        if len(set(self.wrong)) != len(self.wrong):
            raise ValueError(f"Duplicate wrong options in question: {self.prompt!r}")


@dataclass(frozen=True, slots=True)
class Topic:
    """A named subject area and its question bank."""

    id: str
    title: str
    link_url: str
    doc_url: str
    questions: tuple[RawQuestion, ...] = ()


@dataclass(frozen=True, slots=True)
class TopicSummary:
    """Topic metadata exposed to the page before a quiz starts (no questions)."""

    id: str
    title: str
    link_url: str
    doc_url: str
    question_count: int


@dataclass(slots=True)
class QuizQuestion:
    """Randomized, session-specific rendering of a RawQuestion."""

    prompt: str
    options: list[str]
    answer_index: int
    explanation: str = ""


@dataclass(frozen=True, slots=True)
class Badge:
    """Qualitative label derived from a score percentage."""

    label: str
    emoji: str
    tone: str


@dataclass(frozen=True, slots=True)
class Attempt:
    """Immutable record of one completed quiz run."""

    topic_id: str
    topic_title: str
    score: int
    total: int
    percent: int
    timestamp_iso: str
    badge: str

    def __post_init__(self) -> None:
        if self.total < 0 or not 0 <= self.score <= self.total:
            raise ValueError(f"Invalid score {self.score}/{self.total}.")


class SessionState(Enum):
    """Lifecycle of a quiz session."""

    IDLE = "idle"
    READY = "ready"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(slots=True)
class QuestionView:
    """What the page may show for the current question (answer withheld)."""

    index: int
    total: int
    prompt: str
    prompt_html: str
    options: list[str]
    selected_option: int | None
    progress_percent: int
    is_last: bool


@dataclass(slots=True)
class ReviewItem:
    """Per-question breakdown shown once a run is scored."""

    prompt: str
    options: list[str]
    answer_index: int
    chosen_index: int | None
    explanation_html: str


@dataclass(slots=True)
class ResultView:
    """Result summary for a completed run."""

    score: int
    total: int
    percent: int
    badge: Badge
    review: list[ReviewItem] = field(default_factory=list)


@dataclass(slots=True)
class SessionView:
    """Everything the page needs to render the current screen."""

    state: SessionState
    topic: TopicSummary | None
    question: QuestionView | None
    result: ResultView | None
    history: list[Attempt] = field(default_factory=list)
