"""Utilities for loading topics from the human-friendly question bank files.

File format (one topic per file; blocks separated by blank lines or '---'):

    ID: ai-101
    TITLE: AI Foundations
    LINK: https://linkedin.com/
    DOC: /pdfs/ai-101.pdf

    Q: Question text. Additional lines until the next marker are treated
       as part of the question.
    CORRECT: The correct answer
    WRONG: An incorrect answer      (repeat for each distractor)
    EXPLANATION: Why the correct answer is correct (optional)

The first block is the topic header; every following block is a question.
A line that is just "#" or starts with "# " is a comment. Other text that
begins with "#" (such as "#1 priority") is kept as content.
Adding a topic means dropping another file next to the existing ones.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from pm_quiz.constants.quiz_constants import TOPIC_FILE_PATTERN, TOPICS_DIR
from pm_quiz.core.models import RawQuestion, Topic

logger = logging.getLogger(__name__)


class TopicImportError(Exception):
    """Raised when a topic definition cannot be parsed."""


@dataclass(slots=True)
class ImportedTopic:
    """Container for a parsed topic and the file it came from."""

    source_path: Path
    topic: Topic


_HEADER_FIELDS = ("ID", "TITLE", "LINK", "DOC")
_QUESTION_FIELDS = ("Q", "CORRECT", "WRONG", "EXPLANATION")


def load_topic_from_file(file_path: Path) -> ImportedTopic:
    text = file_path.read_text(encoding="utf-8")
    try:
        topic = parse_topic_text(text)
    except TopicImportError as exc:
        raise TopicImportError(f"{file_path.name}: {exc}") from exc
    return ImportedTopic(source_path=file_path, topic=topic)


def load_topics_from_dir(directory: Path = TOPICS_DIR) -> list[Topic]:
    """Load every topic file in ``directory``, ordered by file name."""
    topics: list[Topic] = []
    seen_ids: set[str] = set()
    for file_path in sorted(directory.glob(TOPIC_FILE_PATTERN)):
        imported = load_topic_from_file(file_path)
        if imported.topic.id in seen_ids:
            raise TopicImportError(f"Duplicate topic id '{imported.topic.id}' in {file_path.name}.")
        seen_ids.add(imported.topic.id)
        topics.append(imported.topic)
        logger.debug("Loaded topic %s (%d questions)", imported.topic.id, len(imported.topic.questions))
    return topics


def load_default_topics() -> list[Topic]:
    return load_topics_from_dir(TOPICS_DIR)


def parse_topic_text(text: str) -> Topic:
    blocks = _split_blocks(text)
    if not blocks:
        raise TopicImportError("Topic file is empty.")

    header = _parse_header(blocks[0])
    questions = tuple(_parse_question(block) for block in blocks[1:])
    return Topic(
        id=header["ID"],
        title=header["TITLE"],
        link_url=header["LINK"],
        doc_url=header["DOC"],
        questions=questions,
    )


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---" or not stripped:
            if current_block:
                blocks.append("\n".join(current_block))
                current_block = []
            continue
        if _is_comment(stripped):
            continue
        current_block.append(raw_line)
    if current_block:
        blocks.append("\n".join(current_block))
    return blocks


def _is_comment(line: str) -> bool:
    return line == "#" or line.startswith("# ")


def _split_marker(line: str, allowed: tuple[str, ...]) -> tuple[str, str] | None:
    if ":" not in line:
        return None
    marker, value = line.split(":", 1)
    marker = marker.strip().upper()
    if marker not in allowed:
        return None
    return marker, value.strip()


def _parse_header(block: str) -> dict[str, str]:
    header: dict[str, str] = {}
    for raw_line in block.splitlines():
        line = raw_line.strip()
        parsed = _split_marker(line, _HEADER_FIELDS)
        if parsed is None:
            raise TopicImportError(f"Encountered text outside of a known header field: '{line}'.")
        marker, value = parsed
        header[marker] = value

    missing = [name for name in _HEADER_FIELDS if not header.get(name)]
    if missing:
        raise TopicImportError(f"Topic header missing field(s): {', '.join(missing)}.")
    return header


def _parse_question(block: str) -> RawQuestion:
    prompt_lines: list[str] = []
    correct_lines: list[str] = []
    explanation_lines: list[str] = []
    wrong: list[list[str]] = []
    current_section: list[str] | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        parsed = _split_marker(line, _QUESTION_FIELDS)
        if parsed is None:
            if current_section is None:
                raise TopicImportError(f"Encountered text outside of a known section: '{line}'.")
            current_section.append(line)
            continue

        marker, value = parsed
        if marker == "Q":
            current_section = prompt_lines
        elif marker == "CORRECT":
            current_section = correct_lines
        elif marker == "EXPLANATION":
            current_section = explanation_lines
        else:
            current_section = []
            wrong.append(current_section)
        current_section.clear()
        current_section.append(value)

    prompt = _join(prompt_lines)
    correct = _join(correct_lines)
    if not prompt:
        raise TopicImportError("Question text missing (Q: ...)")
    if not correct:
        raise TopicImportError(f"Correct answer missing (CORRECT: ...) for '{prompt}'.")

    wrong_options = tuple(_join(lines) for lines in wrong)
    if any(not option for option in wrong_options):
        raise TopicImportError(f"Wrong option text cannot be empty for '{prompt}'.")

    try:
        return RawQuestion(
            prompt=prompt,
            correct=correct,
            wrong=wrong_options,
            explanation=_join(explanation_lines),
        )
    except ValueError as exc:
        raise TopicImportError(str(exc)) from exc


def _join(lines: list[str]) -> str:
    return "\n".join(line for line in lines if line).strip()
