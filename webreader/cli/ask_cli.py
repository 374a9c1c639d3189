"""Typer-based command line for asking questions about a page."""

import os

os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

import asyncio
from typing import Optional

import typer

from webreader.config import get_settings
from webreader.services.genai_client import create_genai_client
from webreader.services.page_fetcher import PageFetchError
from webreader.services.page_qa import BackendInvocationError, PageQuestionAnswerer

app = typer.Typer(help="Ask Gemini questions about the contents of a web page.")


async def _ask(
    answerer: PageQuestionAnswerer, url: str, question: str, show_prompt: bool
) -> str:
    html = await answerer.fetch(url)
    if show_prompt:
        typer.echo(answerer.build_prompt(html, question))
        typer.echo("")
    return await answerer.answer_html(html, question)


@app.command()
def ask(
    url: str = typer.Argument(..., help="Page to read"),
    question: str = typer.Argument(..., help="Question about the page"),
    max_chars: Optional[int] = typer.Option(
        None, "--max-chars", help="Maximum characters of page text to send"
    ),
    model: Optional[str] = typer.Option(None, "--model", help="Gemini model override"),
    show_prompt: bool = typer.Option(
        False, "--show-prompt", help="Print the prompt before the answer"
    ),
):
    """Answer QUESTION using the contents of the page at URL."""
    settings = get_settings()
    answerer = PageQuestionAnswerer(
        client=create_genai_client(settings),
        settings=settings,
        model=model,
        max_extract_chars=max_chars,
    )
    try:
        answer = asyncio.run(_ask(answerer, url, question, show_prompt))
    except PageFetchError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(1)
    except BackendInvocationError as e:
        typer.echo(f"✗ Error calling Gemini API: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(answer)


@app.command()
def extract(
    url: str = typer.Argument(..., help="Page to read"),
    max_chars: Optional[int] = typer.Option(
        None, "--max-chars", help="Maximum characters of page text to print"
    ),
):
    """Print the readable text extracted from the page at URL."""
    answerer = PageQuestionAnswerer(client=None, max_extract_chars=max_chars)
    try:
        html = asyncio.run(answerer.fetch(url))
    except PageFetchError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(1)
    typer.echo(answerer.prepare_context(html))


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, help="Port (defaults to PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "webreader.main:app",
        host=host,
        port=port or get_settings().port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
