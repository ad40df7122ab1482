from unittest.mock import MagicMock

import pytest

from medcommittee.llm.client_base import BaseLlmClient
from medcommittee.llm.exceptions import LlmUnavailableError
from medcommittee.llm.extraction_client import LlmExtractionClient


def _make_client(temperature: float = 0.0) -> tuple[LlmExtractionClient, MagicMock]:
    backend = MagicMock(spec=BaseLlmClient)
    backend.create_chat_completion.return_value = '{"שם המבוטח": "דוגמה כהן"}'
    client = LlmExtractionClient(
        client=backend,
        model="gpt-4o-mini",
        temperature=temperature,
        max_tokens=4000,
    )
    return client, backend


class TestLlmExtractionClient:
    def test_complete_returns_raw_response(self) -> None:
        client, backend = _make_client()

        assert client.complete("prompt") == '{"שם המבוטח": "דוגמה כהן"}'
        backend.create_chat_completion.assert_called_once_with(
            model="gpt-4o-mini",
            temperature=0.0,
            system_prompt="",
            user_prompt="prompt",
            max_tokens=4000,
        )

    def test_complete_with_images_passes_images(self) -> None:
        client, backend = _make_client()

        client.complete_with_images("prompt", [b"png"])

        assert backend.create_chat_completion.call_args.kwargs["images"] == [b"png"]

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(0.9, 0.2), (-1.0, 0.0), (0.1, 0.1)],
    )
    def test_clamps_temperature(self, requested: float, expected: float) -> None:
        client, backend = _make_client(temperature=requested)
        client.complete("prompt")
        assert client.temperature == expected
        assert backend.create_chat_completion.call_args.kwargs["temperature"] == expected

    def test_backend_failure_propagates(self) -> None:
        client, backend = _make_client()
        backend.create_chat_completion.side_effect = LlmUnavailableError("AI returned empty response")
        with pytest.raises(LlmUnavailableError):
            client.complete("prompt")
