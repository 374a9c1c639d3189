"""Normalization of Gemini generation responses into a single answer string.

The shape of a generation response is not stable across SDK versions and
modes, so the answer is looked up by an ordered list of shape rules. Each
rule returns the answer or None; the first answer wins. When no rule matches,
the whole response is serialized to JSON so the caller still gets a string.
"""

import inspect
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import logfire
from pydantic_core import to_json


def _field(value: Any, name: str) -> Any:
    """Read a field by key from mappings and by attribute from objects."""
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def _first(value: Any) -> Any:
    if _is_sequence(value) and len(value) > 0:
        return value[0]
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return serialize_response(value)


def serialize_response(response: Any) -> str:
    """
    Serialize a response of any shape to a JSON string.

    Pydantic models (the SDK's response types), dataclasses, mappings and
    sequences are dumped structurally with None fields left out; objects
    pydantic does not know are rendered with repr().
    """
    try:
        return to_json(
            response, by_alias=False, exclude_none=True, fallback=repr
        ).decode()
    except (TypeError, ValueError) as e:
        logfire.warn(
            "Response could not be serialized to JSON",
            error=str(e),
            response_type=type(response).__name__,
        )
        return repr(response)


def _from_text_field(response: Any) -> str | None:
    text = _field(response, "text")
    if isinstance(text, str) and text.strip():
        return text
    return None


def _from_text_accessor(response: Any) -> str | None:
    accessor = _field(response, "text")
    if not callable(accessor):
        return None
    result = accessor()
    if isinstance(result, str) and result.strip():
        return result
    if inspect.iscoroutine(result):
        # Async accessors cannot be awaited from here
        result.close()
    return None


def _from_output_content(response: Any) -> str | None:
    content = _field(_first(_field(response, "output")), "content")
    if not content:
        return None
    if _is_sequence(content):
        return "\n".join(_as_text(_field(item, "text") or item) for item in content)
    return _as_text(_field(content, "text") or content)


def _from_results(response: Any) -> str | None:
    output_text = _field(_first(_field(response, "results")), "output_text")
    if not output_text:
        return None
    return _as_text(output_text)


_RULES: tuple[tuple[str, Callable[[Any], str | None]], ...] = (
    ("text_field", _from_text_field),
    ("text_accessor", _from_text_accessor),
    ("output_content", _from_output_content),
    ("results_output_text", _from_results),
)


def normalize_response(response: Any) -> str:
    """
    Extract the answer text from a generation response.

    Rules, in priority order:
    1. a non-blank string ``text`` field
    2. a callable ``text`` accessor (failures are logged and skipped)
    3. ``output[0].content`` (a list of parts is joined with newlines)
    4. ``results[0].output_text``
    5. a JSON serialization of the whole response

    Never raises and never returns None.

    Args:
        response: Whatever the backend returned

    Returns:
        The answer text
    """
    for name, rule in _RULES:
        try:
            answer = rule(response)
        except Exception as e:
            logfire.warn(
                "Response shape rule failed, trying the next one",
                rule=name,
                error=str(e),
                error_type=type(e).__name__,
            )
            continue
        if answer is not None:
            return answer

    logfire.info(
        "Unrecognized response shape, returning serialized response",
        response_type=type(response).__name__,
    )
    return serialize_response(response)
