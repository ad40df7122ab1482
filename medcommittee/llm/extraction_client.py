from medcommittee.llm.client_base import BaseLlmClient
from medcommittee.logging.logger import Log

MAX_TEMPERATURE = 0.2


class LlmExtractionClient:
    """Sends a rendered prompt to the configured LLM and returns its raw answer.

    The answer is not validated here; ResponseNormalizer is the only parser.
    """

    def __init__(
        self,
        *,
        client: BaseLlmClient,
        model: str,
        temperature: float = 0.0,
        max_tokens: int = 4000,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(MAX_TEMPERATURE, temperature))
        self._max_tokens = max_tokens
        self._system_prompt = system_prompt

    @property
    def temperature(self) -> float:
        return self._temperature

    def complete(self, prompt: str) -> str:
        """Return the raw completion for a text prompt.

        Raises:
            LlmUnavailableError: when the backend cannot produce an answer.
        """
        Log.debug(f"LLM prompt ({len(prompt)} chars)")
        raw = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            max_tokens=self._max_tokens,
        )
        Log.debug(f"LLM raw response ({len(raw)} chars)")
        return raw

    def complete_with_images(self, prompt: str, images: list[bytes]) -> str:
        Log.info(f"LLM vision request with {len(images)} page image(s)")
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            max_tokens=self._max_tokens,
            images=images,
        )
