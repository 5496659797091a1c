from pathlib import Path
import tempfile
import textwrap
import unittest

from pm_quiz.core.topic_loader import (
    TopicImportError,
    load_default_topics,
    load_topic_from_file,
    load_topics_from_dir,
    parse_topic_text,
)

_VALID_TOPIC = textwrap.dedent(
    """\
    # Sample topic used by the tests
    ID: pm-201
    TITLE: Product Metrics
    LINK: https://example.com/post
    DOC: /pdfs/pm-201.pdf

    ---

    Q: Which metric tracks
    returning users?
    CORRECT: Retention
    WRONG: Bounce rate
    WRONG: Page views
    EXPLANATION: Retention measures users who come back.
    It is usually shown as a cohort curve.

    Q: North Star metric means:
    CORRECT: The single metric that best captures delivered value
    WRONG: Any vanity metric
    """
)


class ParseTopicTextTests(unittest.TestCase):
    def test_parses_header_and_questions(self) -> None:
        topic = parse_topic_text(_VALID_TOPIC)
        self.assertEqual(topic.id, "pm-201")
        self.assertEqual(topic.title, "Product Metrics")
        self.assertEqual(topic.link_url, "https://example.com/post")
        self.assertEqual(topic.doc_url, "/pdfs/pm-201.pdf")
        self.assertEqual(len(topic.questions), 2)

        first, second = topic.questions
        self.assertEqual(first.prompt, "Which metric tracks\nreturning users?")
        self.assertEqual(first.correct, "Retention")
        self.assertEqual(first.wrong, ("Bounce rate", "Page views"))
        self.assertEqual(
            first.explanation,
            "Retention measures users who come back.\nIt is usually shown as a cohort curve.",
        )
        self.assertEqual(second.prompt, "North Star metric means:")
        self.assertEqual(second.explanation, "")

    def test_hash_text_without_space_is_content(self) -> None:
        text = (
            "ID: x\nTITLE: X\nLINK: l\nDOC: d\n\n"
            "Q: What is\n#1 priority?\n# reviewer note\nCORRECT: #growth\nWRONG: a\n"
        )
        question = parse_topic_text(text).questions[0]
        self.assertEqual(question.prompt, "What is\n#1 priority?")
        self.assertEqual(question.correct, "#growth")

    def test_empty_text_rejected(self) -> None:
        with self.assertRaises(TopicImportError):
            parse_topic_text("\n\n")

    def test_missing_header_field_rejected(self) -> None:
        with self.assertRaisesRegex(TopicImportError, "DOC"):
            parse_topic_text("ID: x\nTITLE: X\nLINK: https://example.com/\n")

    def test_question_in_header_block_rejected(self) -> None:
        with self.assertRaises(TopicImportError):
            parse_topic_text("ID: x\nTITLE: X\nLINK: l\nDOC: d\nQ: What?\n")

    def test_missing_correct_answer_rejected(self) -> None:
        text = "ID: x\nTITLE: X\nLINK: l\nDOC: d\n\nQ: What?\nWRONG: no\n"
        with self.assertRaisesRegex(TopicImportError, "CORRECT"):
            parse_topic_text(text)

    def test_text_before_any_section_rejected(self) -> None:
        text = "ID: x\nTITLE: X\nLINK: l\nDOC: d\n\nstray line\nQ: What?\nCORRECT: yes\n"
        with self.assertRaises(TopicImportError):
            parse_topic_text(text)

    def test_correct_repeated_as_wrong_rejected(self) -> None:
        text = "ID: x\nTITLE: X\nLINK: l\nDOC: d\n\nQ: What?\nCORRECT: yes\nWRONG: yes\n"
        with self.assertRaises(TopicImportError):
            parse_topic_text(text)


class LoadTopicFilesTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_load_topic_from_file_reports_file_name(self) -> None:
        broken = self.directory / "broken.txt"
        broken.write_text("ID: x\n", encoding="utf-8")
        with self.assertRaisesRegex(TopicImportError, "broken.txt"):
            load_topic_from_file(broken)

    def test_load_topics_sorted_by_file_name(self) -> None:
        (self.directory / "b.txt").write_text(_VALID_TOPIC, encoding="utf-8")
        (self.directory / "a.txt").write_text(
            _VALID_TOPIC.replace("ID: pm-201", "ID: pm-101"), encoding="utf-8"
        )
        (self.directory / "notes.md").write_text("ignored", encoding="utf-8")
        topics = load_topics_from_dir(self.directory)
        self.assertEqual([topic.id for topic in topics], ["pm-101", "pm-201"])

    def test_duplicate_topic_ids_rejected(self) -> None:
        (self.directory / "a.txt").write_text(_VALID_TOPIC, encoding="utf-8")
        (self.directory / "b.txt").write_text(_VALID_TOPIC, encoding="utf-8")
        with self.assertRaisesRegex(TopicImportError, "Duplicate"):
            load_topics_from_dir(self.directory)


class BundledQuestionBankTests(unittest.TestCase):
    def test_bundled_topic_loads(self) -> None:
        topics = load_default_topics()
        self.assertEqual([topic.id for topic in topics], ["ai-101"])
        topic = topics[0]
        self.assertEqual(topic.title, "AI Foundations")
        self.assertEqual(len(topic.questions), 15)
        for question in topic.questions:
            self.assertEqual(len(question.wrong), 3)
            self.assertTrue(question.explanation)


if __name__ == "__main__":
    unittest.main()
