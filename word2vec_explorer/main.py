from __future__ import annotations

import html
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, Response
from starlette.concurrency import run_in_threadpool

from .client import WordRelationClient
from .config import Settings, settings as default_settings
from .errors import (
    AuthenticationFailure,
    ClientNotConfigured,
    EmptyInput,
    WordRelationError,
)
from .logger import get_logger
from .models import (
    ErrorDetail,
    HealthResponse,
    RelatedWordsRequest,
    RelatedWordsResponse,
)
from .plot import axis_domain, render_plot

logger = get_logger()

TITLE = "Word2Vec Visual Explorer"


def _status_for(err: WordRelationError) -> int:
    if isinstance(err, EmptyInput):
        return 400
    if isinstance(err, ClientNotConfigured):
        return 503
    if isinstance(err, AuthenticationFailure):
        return 401
    return 502


def _http_error(err: WordRelationError) -> HTTPException:
    detail = ErrorDetail(category=err.category, message=err.user_message, retriable=err.retriable)
    return HTTPException(status_code=_status_for(err), detail=detail.model_dump())


def _page(body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{TITLE}</title>
<style>
body {{ font-family: sans-serif; background: #f1f5f9; margin: 0; padding: 2rem; color: #334155; }}
main {{ max-width: 56rem; margin: 0 auto; background: white; border-radius: 0.5rem; padding: 2rem; }}
h1 {{ color: #0369a1; text-align: center; }}
form {{ display: flex; gap: 1rem; margin-bottom: 1.5rem; }}
input {{ flex-grow: 1; padding: 0.75rem; }}
.error {{ background: #fee2e2; border: 1px solid #f87171; color: #b91c1c; padding: 1rem; border-radius: 0.375rem; }}
.plot {{ border: 1px solid #e2e8f0; border-radius: 0.5rem; padding: 0.5rem; text-align: center; }}
.plot svg {{ max-width: 100%; height: auto; }}
</style>
</head>
<body>
<main>
<h1>{TITLE}</h1>
{body}
</main>
<footer><p style="text-align:center">Word2Vec Visual Explorer. For educational purposes.</p></footer>
</body>
</html>"""


def _error_box(message: str) -> str:
    return f'<div class="error" role="alert"><strong>Error:</strong> {html.escape(message)}</div>'


def _form(word: str) -> str:
    return (
        '<form method="get" action="/" '
        "onsubmit=\"var b=this.querySelector('button');b.disabled=true;b.textContent='Analyzing...';\">"
        f'<input type="text" name="word" value="{html.escape(word, quote=True)}" '
        'placeholder="e.g. \'artificial intelligence\'">'
        '<button type="submit">Analyze</button>'
        "</form>"
    )


def _setup_page() -> str:
    return _page(
        _error_box(ClientNotConfigured.default_message)
        + "<p>This application needs the <code>GEMINI_API_KEY</code> environment variable. "
        "Contact your administrator or check the deployment settings.</p>"
    )


def _svg_markup(image: bytes) -> str:
    text = image.decode("utf-8")
    # Drop the XML prolog so the SVG can be inlined.
    return text[text.find("<svg"):]


def create_app(settings: Optional[Settings] = None, client=None) -> FastAPI:
    settings = settings or default_settings
    words_client = WordRelationClient(settings=settings, client=client)

    app = FastAPI(title=TITLE, version="0.1.0")

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            service="word2vec-explorer",
            configured=words_client.configured,
            model=words_client.model,
        )

    @app.post("/api/related-words", response_model=RelatedWordsResponse)
    async def related_words(request: RelatedWordsRequest) -> RelatedWordsResponse:
        target = request.word.strip()
        try:
            words = await words_client.fetch_related_words(target)
        except WordRelationError as err:
            raise _http_error(err) from err
        return RelatedWordsResponse(
            target_word=target,
            words=words,
            count=len(words),
            x_domain=axis_domain(w.x for w in words),
            y_domain=axis_domain(w.y for w in words),
        )

    @app.get("/api/plot.png")
    async def plot_png(word: str = Query(default="", max_length=100)) -> Response:
        target = word.strip()
        try:
            words = await words_client.fetch_related_words(target)
        except WordRelationError as err:
            raise _http_error(err) from err
        image = await run_in_threadpool(render_plot, words, target, fmt="png")
        return Response(content=image, media_type="image/png")

    @app.get("/", response_class=HTMLResponse)
    async def index(word: Optional[str] = Query(default=None, max_length=100)) -> HTMLResponse:
        if not words_client.configured:
            return HTMLResponse(_setup_page())

        if word is None:
            hint = (
                "<p>Enter a word and press 'Analyze' to see how related words are "
                "distributed on the plane.<br>Examples: school, love, computer</p>"
            )
            return HTMLResponse(_page(_form("") + f'<div class="plot">{hint}</div>'))

        target = word.strip()
        if not target:
            return HTMLResponse(_page(_form(word) + _error_box(EmptyInput.default_message)))

        try:
            words = await words_client.fetch_related_words(target)
        except WordRelationError as err:
            logger.info("Rendering error page for %r: %s", target, err.category)
            return HTMLResponse(_page(_form(target) + _error_box(err.user_message)))

        svg = _svg_markup(await run_in_threadpool(render_plot, words, target, fmt="svg"))
        return HTMLResponse(_page(_form(target) + f'<div class="plot">{svg}</div>'))

    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    main()
