"""Tests for Gemini response normalization."""

import json
from types import SimpleNamespace

import pytest
from google.genai import types

from webreader.services.response_normalizer import (
    normalize_response,
    serialize_response,
)


class TestTextField:
    """Rule 1: a non-blank string text field."""

    def test_mapping_text(self):
        assert normalize_response({"text": "Paris"}) == "Paris"

    def test_attribute_text(self):
        assert normalize_response(SimpleNamespace(text="Paris")) == "Paris"

    def test_text_returned_untrimmed(self):
        assert normalize_response({"text": "  Paris \n"}) == "  Paris \n"

    def test_blank_text_falls_through(self):
        response = {"text": "   ", "results": [{"output_text": "from results"}]}

        assert normalize_response(response) == "from results"

    def test_text_beats_results(self):
        response = {"text": "from text", "results": [{"output_text": "from results"}]}

        assert normalize_response(response) == "from text"

    def test_sdk_response_model(self):
        """A real google-genai response exposes the answer through .text."""
        response = types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(
                        role="model", parts=[types.Part(text="Paris")]
                    )
                )
            ]
        )

        assert normalize_response(response) == "Paris"


class TestTextAccessor:
    """Rule 2: a callable text accessor."""

    def test_accessor_result_used(self):
        response = SimpleNamespace(text=lambda: "from accessor")

        assert normalize_response(response) == "from accessor"

    def test_failing_accessor_falls_through(self, logfire_capture):
        def broken():
            raise RuntimeError("accessor exploded")

        response = SimpleNamespace(text=broken, results=[{"output_text": "fallback"}])

        assert normalize_response(response) == "fallback"
        warnings = [log for log in logfire_capture if log[0] == "warn"]
        assert any(log[2].get("rule") == "text_accessor" for log in warnings)
        assert any("accessor exploded" in log[2].get("error", "") for log in warnings)

    def test_accessor_returning_non_string_falls_through(self):
        response = SimpleNamespace(text=lambda: None, results=[{"output_text": "r"}])

        assert normalize_response(response) == "r"

    def test_async_accessor_falls_through(self):
        async def text():
            return "never awaited"

        response = SimpleNamespace(text=text, results=[{"output_text": "r"}])

        assert normalize_response(response) == "r"


class TestOutputContent:
    """Rule 3: output[0].content."""

    def test_content_parts_joined_with_newlines(self):
        response = {"output": [{"content": [{"text": "first"}, "second"]}]}

        assert normalize_response(response) == "first\nsecond"

    def test_content_with_text(self):
        response = {"output": [{"content": {"text": "single"}}]}

        assert normalize_response(response) == "single"

    def test_plain_string_content(self):
        response = {"output": [SimpleNamespace(content="plain")]}

        assert normalize_response(response) == "plain"

    def test_content_without_text_is_serialized(self):
        response = {"output": [{"content": {"kind": "image"}}]}

        assert json.loads(normalize_response(response)) == {"kind": "image"}

    def test_output_beats_results(self):
        response = {
            "output": [{"content": "from output"}],
            "results": [{"output_text": "from results"}],
        }

        assert normalize_response(response) == "from output"

    def test_empty_output_falls_through(self):
        response = {"output": [], "results": [{"output_text": "from results"}]}

        assert normalize_response(response) == "from results"


class TestResults:
    """Rule 4: results[0].output_text."""

    def test_results_output_text(self):
        assert normalize_response({"results": [{"output_text": "r"}]}) == "r"

    def test_results_without_output_text_serialized(self):
        response = {"results": [{"score": 1}]}

        assert json.loads(normalize_response(response)) == response


class TestSerializedFallback:
    """Rule 5: the whole response serialized."""

    def test_empty_mapping(self):
        assert normalize_response({}) == "{}"

    def test_unknown_mapping(self):
        response = {"candidates": [], "usage": {"tokens": 3}}

        assert json.loads(normalize_response(response)) == response

    def test_none(self):
        assert normalize_response(None) == "null"

    def test_unknown_object(self):
        result = normalize_response(object())

        assert isinstance(result, str)
        assert result

    def test_attribute_that_raises(self):
        class Exploding:
            @property
            def text(self):
                raise RuntimeError("no text")

        result = normalize_response(Exploding())

        assert isinstance(result, str)

    def test_sdk_response_without_text(self):
        response = types.GenerateContentResponse(model_version="gemini-test")

        assert json.loads(normalize_response(response))["model_version"] == "gemini-test"


class TestSerializeResponse:
    """Test serialize_response() helper."""

    def test_pydantic_model_uses_field_names(self):
        response = types.GenerateContentResponse(model_version="m")

        assert json.loads(serialize_response(response))["model_version"] == "m"

    def test_circular_structure_uses_repr(self):
        response: dict = {}
        response["self"] = response

        assert isinstance(serialize_response(response), str)

    @pytest.mark.parametrize("value", [1, "x", [1, 2], {"a": 1}])
    def test_plain_values(self, value):
        assert json.loads(serialize_response(value)) == value
