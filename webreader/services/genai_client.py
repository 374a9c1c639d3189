"""Gemini (Google Gen AI) client construction.

Two auth modes are supported and may both be configured:
- API key mode via GEMINI_API_KEY / GOOGLE_API_KEY
- Vertex AI mode via GOOGLE_GENAI_USE_VERTEXAI + GOOGLE_CLOUD_PROJECT
  (+ GOOGLE_CLOUD_LOCATION)

The client is created once at application startup and injected into each
request; see webreader.main and webreader.api.extract.
"""

from typing import Any

import logfire
from google import genai
from google.auth.exceptions import GoogleAuthError

from webreader.config import Settings, get_settings
from webreader.logging_config import mask_pii


def build_client_kwargs(settings: Settings) -> dict[str, Any]:
    """Translate settings into genai.Client keyword arguments."""
    kwargs: dict[str, Any] = {}
    if settings.google_genai_use_vertexai:
        kwargs["vertexai"] = True
        # The SDK rejects an API key combined with project/location, so the
        # key is only passed in Vertex express mode (no project).
        if settings.google_cloud_project:
            kwargs["project"] = settings.google_cloud_project
            kwargs["location"] = settings.google_cloud_location
        elif settings.gemini_api_key:
            kwargs["api_key"] = settings.gemini_api_key
    elif settings.gemini_api_key:
        kwargs["api_key"] = settings.gemini_api_key
    return kwargs


def create_genai_client(settings: Settings | None = None) -> genai.Client | None:
    """
    Create the Gemini client from settings.

    Returns None (after logging) when the SDK refuses the configuration,
    e.g. no credentials at all; requests then fail as backend errors instead
    of the whole service failing to start.
    """
    settings = settings or get_settings()
    kwargs = build_client_kwargs(settings)
    auth_mode = "vertexai" if kwargs.get("vertexai") else "api_key"

    try:
        client = genai.Client(**kwargs)
    except (ValueError, GoogleAuthError) as e:
        logfire.error(
            "Gemini client could not be created",
            auth_mode=auth_mode,
            error=str(e),
            error_type=type(e).__name__,
        )
        return None

    logfire.info(
        "Gemini client created",
        auth_mode=auth_mode,
        api_key=mask_pii(kwargs.get("api_key")),
        project=kwargs.get("project"),
        location=kwargs.get("location"),
    )
    return client
