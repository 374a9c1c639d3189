"""Page question answering orchestration.

Sequences one request end to end:
1. Fetch the page (bounded by the fetch timeout)
2. Extract readable body text
3. Truncate it to the configured context size
4. Compose the grounding prompt
5. Call Gemini
6. Normalize the response into an answer string

Fetch failures and Gemini failures surface as distinct exceptions so the HTTP
layer can report them differently. Nothing is retried.
"""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable

import logfire
from google.genai import types

from webreader.config import Settings, get_settings
from webreader.services.context import resolve_max_chars, truncate_context
from webreader.services.extractor import extract_text
from webreader.services.page_fetcher import fetch_page
from webreader.services.prompt_builder import compose_prompt
from webreader.services.response_normalizer import normalize_response

PageFetcher = Callable[..., Awaitable[str | bytes]]


class BackendInvocationError(Exception):
    """Raised when the Gemini call fails (network, auth, quota, no client)."""

    pass


class PageQuestionAnswerer:
    """Answer a question about a single web page with Gemini.

    The Gemini client is passed in rather than created here, so one client is
    shared by all requests and tests can substitute a fake.

    Example:
        >>> answerer = PageQuestionAnswerer(client=app.state.genai_client)
        >>> await answerer.answer("https://example.com", "What is this page about?")
    """

    def __init__(
        self,
        client: Any,
        settings: Settings | None = None,
        *,
        model: str | None = None,
        max_extract_chars: int | None = None,
        fetcher: PageFetcher | None = None,
    ):
        """Initialize the answerer.

        Args:
            client: google.genai.Client (or compatible); None means Gemini is
                    not configured and every answer() fails as a backend error
            settings: Settings to use; defaults to get_settings()
            model: Model override; defaults to settings.gemini_model
            max_extract_chars: Context size override; anything but a
                               positive integer falls back to
                               settings.max_extract_chars
            fetcher: Page fetch coroutine; defaults to fetch_page
        """
        self._client = client
        self._settings = settings or get_settings()
        self.model = model or self._settings.gemini_model
        self.max_extract_chars = resolve_max_chars(
            max_extract_chars, self._settings.max_extract_chars
        )
        self._fetcher = fetcher or fetch_page

    async def fetch(self, url: str) -> str | bytes:
        """Fetch the page HTML. Raises PageFetchError on failure."""
        return await self._fetcher(
            url,
            timeout_seconds=self._settings.fetch_timeout_seconds,
            user_agent=self._settings.fetch_user_agent,
            max_bytes=self._settings.fetch_max_bytes,
        )

    def prepare_context(self, html: str | bytes | None) -> str:
        """Extract and bound the page text used as model context."""
        extracted = extract_text(html)
        context = truncate_context(extracted, self.max_extract_chars)
        logfire.info(
            "Page text extracted",
            extracted_chars=len(extracted),
            context_chars=len(context),
            truncated=len(context) < len(extracted),
            max_extract_chars=self.max_extract_chars,
        )
        return context

    def build_prompt(self, html: str | bytes | None, question: str) -> str:
        """Build the full prompt for a page and a question."""
        return compose_prompt(self.prepare_context(html), question)

    def _generation_config(self) -> types.GenerateContentConfig | None:
        temperature = self._settings.gemini_temperature
        max_output_tokens = self._settings.gemini_max_output_tokens
        if temperature is None and max_output_tokens is None:
            return None
        return types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )

    async def generate(self, prompt: str) -> Any:
        """Send the prompt to Gemini and return the raw response.

        Raises:
            BackendInvocationError: If no client is configured or the call fails
        """
        if self._client is None:
            raise BackendInvocationError("Gemini client is not configured")

        start_time = time.time()
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self._generation_config(),
            )
        except Exception as e:
            logfire.error(
                "Gemini call failed",
                model=self.model,
                error=str(e),
                error_type=type(e).__name__,
                response_time_ms=(time.time() - start_time) * 1000,
            )
            raise BackendInvocationError(str(e) or type(e).__name__) from e

        logfire.info(
            "Gemini call completed",
            model=self.model,
            prompt_chars=len(prompt),
            response_time_ms=(time.time() - start_time) * 1000,
        )
        return response

    async def answer(self, url: str, question: str) -> str:
        """
        Answer a question about the page at url.

        Args:
            url: Page URL
            question: The user's question

        Returns:
            The normalized answer text

        Raises:
            PageFetchError: If the page cannot be fetched
            BackendInvocationError: If the Gemini call fails
        """
        with logfire.span("Answer page question", url=url, model=self.model):
            html = await self.fetch(url)
            answer = await self.answer_html(html, question)
            logfire.info("Answer produced", url=url, answer_chars=len(answer))
            return answer

    async def answer_html(self, html: str | bytes | None, question: str) -> str:
        """Answer a question about already fetched page HTML."""
        response = await self.generate(self.build_prompt(html, question))
        return normalize_response(response)
