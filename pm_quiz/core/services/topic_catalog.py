"""Service for managing the collection of quiz topics."""

from __future__ import annotations

from pm_quiz.core.models import Topic, TopicSummary


class TopicCatalog:
    """Holds the static question bank and exposes answer-free summaries."""

    def __init__(self, topics: list[Topic]) -> None:
        self._topics: dict[str, Topic] = {}
        for topic in topics:
            if topic.id in self._topics:
                raise ValueError(f"Duplicate topic id '{topic.id}'.")
            self._topics[topic.id] = topic

    def get_topic(self, topic_id: str) -> Topic:
        try:
            return self._topics[topic_id]
        except KeyError:
            raise KeyError(f"Unknown topic '{topic_id}'") from None

    def get_summary(self, topic_id: str) -> TopicSummary:
        return self._summarize(self.get_topic(topic_id))

    def has_topic(self, topic_id: str) -> bool:
        return topic_id in self._topics

    def get_topic_count(self) -> int:
        return len(self._topics)

    def list_summaries(self, query: str = "") -> list[TopicSummary]:
        """Return topic summaries whose title contains ``query`` (case-insensitive)."""
        needle = query.strip().lower()
        return [
            self._summarize(topic)
            for topic in self._topics.values()
            if not needle or needle in topic.title.lower()
        ]

    def default_topic_id(self) -> str | None:
        """Preselect the only topic when the bank holds exactly one."""
        if len(self._topics) == 1:
            return next(iter(self._topics))
        return None

    @staticmethod
    def _summarize(topic: Topic) -> TopicSummary:
        return TopicSummary(
            id=topic.id,
            title=topic.title,
            link_url=topic.link_url,
            doc_url=topic.doc_url,
            question_count=len(topic.questions),
        )
