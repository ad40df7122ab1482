from abc import ABC, abstractmethod


class BaseLlmClient(ABC):
    """Contract for provider-specific chat-completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        images: list[bytes] | None = None,
    ) -> str:
        """Return the provider response as plain text.

        Args:
            images: Optional PNG page images attached to the user message.

        Raises:
            LlmUnavailableError: on network failure, API error or an empty answer.
        """
