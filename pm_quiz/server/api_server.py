"""FastAPI server that exposes the quiz page and its JSON endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from pm_quiz.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_TAGLINE, APP_VERSION
from pm_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from pm_quiz.constants.quiz_constants import HISTORY_DISPLAY_LIMIT
from pm_quiz.core.quiz_manager import QuizManager
from pm_quiz.styling import Styles

_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>__APP_NAME__</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>__PAGE_STYLE__
    </style>
  </head>
  <body>
    <section class="card">
      <span class="tagline">__APP_TAGLINE__</span>
      <h1>__APP_NAME__</h1>
      <p class="muted">__APP_ABOUT__</p>
    </section>
    <section class="card" id="topic-card">
      <strong>1) Select a topic</strong>
      <input id="topic-search" placeholder="Search topics…" />
      <select id="topic-select"><option value="" disabled selected>Choose a topic</option></select>
      <div id="topic-links" class="links hidden">
        <a id="topic-link" target="_blank" rel="noopener">📌 Open post</a>
        <a id="topic-doc" target="_blank" rel="noopener">📄 Open document</a>
      </div>
    </section>
    <section class="card" id="start-card">
      <strong>2) Start the quiz</strong>
      <p id="start-hint" class="muted">Select a topic to unlock the quiz.</p>
      <button id="start-button" class="primary-button" disabled>▶ Start Quiz</button>
      <p class="muted">Attempts are saved on this device.</p>
    </section>
    <section class="card hidden" id="quiz-card">
      <div class="muted"><strong id="question-counter"></strong> • Progress <span id="progress-label"></span>%</div>
      <div class="progress-track"><div id="progress-fill"></div></div>
      <div id="question-prompt"></div>
      <div id="options" class="options"></div>
      <div class="nav">
        <button id="back-button" class="secondary-button">Back</button>
        <button id="next-button" class="primary-button">Next →</button>
      </div>
    </section>
    <section class="card hidden" id="result-card">
      <div class="muted" id="result-topic"></div>
      <div class="badge-title"><span id="badge-emoji"></span> <span id="badge-label"></span></div>
      <p><strong id="result-score"></strong> • <span id="result-percent"></span>%</p>
      <p>Badge: <span class="pill" id="badge-pill"></span></p>
      <div class="nav">
        <button id="retry-button" class="primary-button">Retry</button>
        <button id="reset-button" class="secondary-button">Back to start</button>
      </div>
      <div id="review"></div>
      <h3>Attempt history</h3>
      <p class="muted" id="history-caption"></p>
      <div id="history"></div>
      <p class="muted">Note: attempt history is saved locally (no login).</p>
    </section>
    <script>
      const el = (id) => document.getElementById(id);
      const setVisibility = (element, isVisible) => element.classList.toggle('hidden', !isVisible);

      async function request(method, path, body) {
        const response = await fetch(path, {
          method,
          headers: body === undefined ? {} : { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        if (!response.ok) {
          throw new Error(`${method} ${path} failed with ${response.status}`);
        }
        return response.json();
      }

      async function loadTopics(query = '') {
        const topics = await request('GET', `/topics?query=${encodeURIComponent(query)}`);
        const select = el('topic-select');
        const current = select.value;
        select.querySelectorAll('option:not([disabled])').forEach((option) => option.remove());
        for (const topic of topics) {
          const option = document.createElement('option');
          option.value = topic.id;
          option.textContent = topic.title;
          select.appendChild(option);
        }
        select.value = current;
      }

      function renderQuestion(question) {
        el('question-counter').textContent = `Question ${question.index + 1}/${question.total}`;
        el('progress-label').textContent = question.progress_percent;
        el('progress-fill').style.width = `${question.progress_percent}%`;
        el('question-prompt').innerHTML = question.prompt_html;
        const options = el('options');
        options.replaceChildren();
        question.options.forEach((text, index) => {
          const button = document.createElement('button');
          button.className = 'option-button' + (question.selected_option === index ? ' selected' : '');
          button.textContent = text;
          button.addEventListener('click', () => act('POST', '/session/option', { option_index: index }));
          options.appendChild(button);
        });
        el('back-button').disabled = question.index === 0;
        el('next-button').disabled = question.selected_option === null;
        el('next-button').textContent = question.is_last ? 'Finish 🎉' : 'Next →';
      }

      function renderResult(view) {
        const result = view.result;
        el('result-card').className = `card tone-${result.badge.tone}`;
        el('result-topic').textContent = `Result • ${view.topic ? view.topic.title : ''}`;
        el('badge-emoji').textContent = result.badge.emoji;
        el('badge-label').textContent = result.badge.label;
        el('badge-pill').textContent = result.badge.label;
        el('result-score').textContent = `Score: ${result.score}/${result.total}`;
        el('result-percent').textContent = result.percent;

        const review = el('review');
        review.replaceChildren();
        result.review.forEach((item, position) => {
          const block = document.createElement('div');
          block.className = 'review-item';
          const prompt = document.createElement('strong');
          prompt.textContent = `${position + 1}. ${item.prompt}`;
          block.appendChild(prompt);
          const answer = document.createElement('div');
          answer.className = 'correct';
          answer.textContent = `✓ ${item.options[item.answer_index]}`;
          block.appendChild(answer);
          if (item.chosen_index !== item.answer_index && item.chosen_index !== null) {
            const chosen = document.createElement('div');
            chosen.className = 'incorrect';
            chosen.textContent = item.options[item.chosen_index];
            block.appendChild(chosen);
          }
          const explanation = document.createElement('div');
          explanation.className = 'muted';
          explanation.innerHTML = item.explanation_html;
          block.appendChild(explanation);
          review.appendChild(block);
        });
      }

      function renderHistory(history) {
        el('history-caption').textContent = `Last ${history.length} attempts on this device`;
        const container = el('history');
        container.replaceChildren();
        if (history.length === 0) {
          container.textContent = 'No attempts yet.';
          return;
        }
        for (const attempt of history) {
          const row = document.createElement('div');
          row.className = 'history-row';
          const when = document.createElement('span');
          when.className = 'muted';
          when.textContent = new Date(attempt.timestamp_iso).toLocaleString();
          const score = document.createElement('strong');
          score.textContent = `${attempt.score}/${attempt.total} (${attempt.percent}%)`;
          row.append(when, score);
          container.appendChild(row);
        }
      }

      function render(view) {
        const hasTopic = view.topic !== null;
        if (hasTopic) {
          el('topic-select').value = view.topic.id;
          el('topic-link').href = view.topic.link_url;
          el('topic-doc').href = view.topic.doc_url;
          el('start-hint').textContent = `${view.topic.question_count} questions • Unlimited retries • Attempt history`;
        }
        setVisibility(el('topic-links'), hasTopic);
        el('start-button').disabled = !hasTopic;

        setVisibility(el('quiz-card'), view.state === 'in_progress' && view.question !== null);
        if (view.question) {
          renderQuestion(view.question);
        }
        setVisibility(el('result-card'), view.state === 'completed');
        if (view.result) {
          renderResult(view);
          renderHistory(view.history);
        }
      }

      async function act(method, path, body) {
        try {
          render(await request(method, path, body));
        } catch (error) {
          console.error(error);
        }
      }

      el('topic-search').addEventListener('input', (event) => loadTopics(event.target.value));
      el('topic-select').addEventListener('change', (event) => act('POST', '/session/topic', { topic_id: event.target.value }));
      el('start-button').addEventListener('click', () => act('POST', '/session/start'));
      el('back-button').addEventListener('click', () => act('POST', '/session/back'));
      el('next-button').addEventListener('click', () => act('POST', '/session/next'));
      el('retry-button').addEventListener('click', () => act('POST', '/session/start'));
      el('reset-button').addEventListener('click', () => act('POST', '/session/reset'));

      loadTopics().then(() => act('GET', '/session'));
    </script>
  </body>
</html>
"""


def _build_page_html() -> str:
    return (
        _PAGE_HTML.replace("__PAGE_STYLE__", Styles.get_page_style())
        .replace("__APP_NAME__", APP_NAME)
        .replace("__APP_TAGLINE__", APP_TAGLINE)
        .replace("__APP_ABOUT__", APP_ABOUT_TEXT)
    )


class TopicSelectionPayload(BaseModel):
    """Payload schema for choosing a topic; null clears the selection."""

    topic_id: str | None = None


class OptionPayload(BaseModel):
    """Payload schema for a tentative answer."""

    option_index: int


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)
    page_html = _build_page_html()

    @app.get("/", response_class=HTMLResponse)
    def serve_quiz_page() -> str:
        return page_html

    @app.get("/topics")
    def list_topics(
        query: str = "",
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[dict[str, Any]]:
        return jsonable_encoder(manager.list_topics(query))

    @app.get("/session")
    def get_session(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, Any]:
        return jsonable_encoder(manager.get_session_view())

    @app.post("/session/topic")
    def select_topic(
        payload: TopicSelectionPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, Any]:
        try:
            manager.select_topic(payload.topic_id or None)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"Unknown topic '{payload.topic_id}'") from exc
        return jsonable_encoder(manager.get_session_view())

    @app.post("/session/start")
    def start_quiz(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, Any]:
        manager.start_quiz()
        return jsonable_encoder(manager.get_session_view())

    @app.post("/session/option")
    def select_option(
        payload: OptionPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, Any]:
        try:
            manager.select_option(payload.option_index)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return jsonable_encoder(manager.get_session_view())

    @app.post("/session/back")
    def go_back(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, Any]:
        try:
            manager.go_back()
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return jsonable_encoder(manager.get_session_view())

    @app.post("/session/next")
    def go_next(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, Any]:
        manager.go_next()
        return jsonable_encoder(manager.get_session_view())

    @app.post("/session/reset")
    def return_to_start(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, Any]:
        manager.return_to_start()
        return jsonable_encoder(manager.get_session_view())

    @app.get("/attempts")
    def list_attempts(
        topic_id: str | None = None,
        limit: int | None = Query(default=HISTORY_DISPLAY_LIMIT, ge=0),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[dict[str, Any]]:
        if topic_id is None:
            attempts = manager.get_all_attempts()
            if limit is not None:
                attempts = attempts[:limit]
        else:
            attempts = manager.get_topic_history(topic_id, limit)
        return jsonable_encoder(attempts)

    return app


def run_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    log_level: str = "info",
) -> None:
    """Serve the quiz app with uvicorn until interrupted."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=log_level)
    server = uvicorn.Server(config)
    server.run()
