"""Tests for strands exception mapping."""

import pytest
from litellm.exceptions import NotFoundError
from pydantic import ValidationError
from strands.types.exceptions import ModelThrottledException

from summarylog.infrastructure.llm import DecisionOutput
from summarylog.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMModelNotFoundError,
    LLMRateLimitError,
    LLMResponseFormatError,
    LLMTimeoutError,
)
from summarylog.infrastructure.llm.strands import map_strands_exception


class TestMapStrandsException:
    """Tests for map_strands_exception function."""

    @pytest.mark.parametrize(
        ("error_message", "expected"),
        [
            ("Authentication failed", LLMAuthenticationError),
            ("Invalid API key provided", LLMAuthenticationError),
            ("Unauthorized access", LLMAuthenticationError),
            ("Rate limit exceeded", LLMRateLimitError),
            ("Too many requests", LLMRateLimitError),
            ("Request timeout", LLMTimeoutError),
            ("Connection timed out", LLMTimeoutError),
            ("Model not found: foo", LLMModelNotFoundError),
            ("The model does not exist", LLMModelNotFoundError),
            ("Structured output could not be parsed", LLMResponseFormatError),
        ],
    )
    def test_map_known_errors(
        self, error_message: str, expected: type[LLMError]
    ) -> None:
        result = map_strands_exception(Exception(error_message))

        assert isinstance(result, expected)
        assert str(result) == error_message

    def test_map_generic_error(self) -> None:
        result = map_strands_exception(RuntimeError("Something broke"))

        assert type(result) is LLMError
        assert str(result) == "Something broke"

    def test_llm_error_passes_through(self) -> None:
        error = LLMRateLimitError("already mapped")

        assert map_strands_exception(error) is error

    def test_map_by_type(self) -> None:
        error = ModelThrottledException("slow down")

        result = map_strands_exception(error)

        assert isinstance(result, LLMRateLimitError)
        assert str(result) == "slow down"

    def test_litellm_not_found(self) -> None:
        error = NotFoundError(message="unknown", model="nope", llm_provider="openai")

        assert isinstance(map_strands_exception(error), LLMModelNotFoundError)

    def test_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            DecisionOutput.model_validate({"action": "merge"})

        result = map_strands_exception(exc_info.value)

        assert isinstance(result, LLMResponseFormatError)
