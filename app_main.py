"""Application entry point for PM Quiz Studio."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from pm_quiz.constants.about import APP_NAME
from pm_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from pm_quiz.constants.quiz_constants import DEFAULT_DATA_DIR, TOPICS_DIR
from pm_quiz.core.quiz_manager import QuizManager
from pm_quiz.core.services.attempt_store import JsonFileAttemptStore
from pm_quiz.core.topic_loader import TopicImportError, load_topics_from_dir
from pm_quiz.server.api_server import run_api_server
from pm_quiz.utils.logging_config import configure_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pm-quiz", description=f"Serve {APP_NAME} locally.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Interface to bind (default: %(default)s)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to listen on (default: %(default)s)")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help="Directory holding the local attempt history (default: %(default)s)",
    )
    parser.add_argument(
        "--topics-dir",
        type=Path,
        default=TOPICS_DIR,
        help="Directory of topic files to load (default: bundled question bank)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Initialize logging, load the question bank, and serve the quiz page."""
    args = _parse_args(argv)
    logger = configure_logging(args.log_level)
    logger.info("Starting %s…", APP_NAME)

    try:
        topics = load_topics_from_dir(args.topics_dir)
    except TopicImportError as exc:
        logger.error("Could not load question bank: %s", exc)
        sys.exit(1)
    if not topics:
        logger.error("No topic files found in %s", args.topics_dir)
        sys.exit(1)
    logger.info("Loaded %d topic(s) from %s", len(topics), args.topics_dir)

    store = JsonFileAttemptStore(args.data_dir)
    logger.info("Attempt history stored at %s", store.path)

    quiz_manager = QuizManager(topics=topics, store=store)
    logger.info("Quiz page available at http://%s:%d/", args.host, args.port)
    run_api_server(quiz_manager, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
