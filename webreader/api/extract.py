"""Page question endpoint.

POST /api/extract takes {"url", "question"}, runs the page question pipeline
and returns {"answer"}. Failures are reported as JSON error bodies:

- 400 {"error": "url and question required"} when a field is missing
- 500 {"error": "Error calling Gemini API", "details": ...} when Gemini fails
- 500 {"error": ...} for page fetch failures and anything unexpected
"""

from typing import Any

import logfire
from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from webreader.constants import (
    BACKEND_ERROR,
    GENERIC_SERVER_ERROR,
    MISSING_FIELDS_ERROR,
)
from webreader.models.extract_models import (
    ErrorResponse,
    ExtractRequest,
    ExtractResponse,
)
from webreader.services.page_fetcher import PageFetchError
from webreader.services.page_qa import BackendInvocationError, PageQuestionAnswerer

router = APIRouter()


def get_genai_client(request: Request) -> Any:
    """Return the Gemini client created at startup (None if unavailable)."""
    return getattr(request.app.state, "genai_client", None)


def get_page_answerer(
    client: Any = Depends(get_genai_client),
) -> PageQuestionAnswerer:
    """Build the per-request answerer around the shared Gemini client."""
    return PageQuestionAnswerer(client=client)


@router.post(
    "/extract",
    response_model=ExtractResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def extract(
    body: ExtractRequest | None = Body(default=None),
    answerer: PageQuestionAnswerer = Depends(get_page_answerer),
):
    """Answer a question about the contents of a web page."""
    if body is None or not body.is_complete():
        logfire.info("Rejected extract request with missing fields")
        return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_ERROR})

    try:
        answer = await answerer.answer(body.url, body.question)
    except BackendInvocationError as e:
        return JSONResponse(
            status_code=500,
            content={"error": BACKEND_ERROR, "details": str(e)},
        )
    except PageFetchError as e:
        return JSONResponse(status_code=500, content={"error": str(e)})
    except Exception as e:
        logfire.exception("Unexpected error answering page question", url=body.url)
        return JSONResponse(
            status_code=500, content={"error": str(e) or GENERIC_SERVER_ERROR}
        )

    return ExtractResponse(answer=answer)
