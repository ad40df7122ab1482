import base64

import httpx
import openai

from medcommittee.llm.client_base import BaseLlmClient
from medcommittee.llm.exceptions import LlmUnavailableError


class OpenAIClientAdapter(BaseLlmClient):
    """LLM client adapter built on the OpenAI-compatible chat API.

    Pass an ``openai.AzureOpenAI`` instance as ``client`` to talk to an
    Azure deployment; ``model`` is then the deployment name.
    """

    def __init__(
        self,
        *,
        api_key: str = "",
        timeout_seconds: int = 60,
        base_url: str | None = None,
        client: openai.OpenAI | None = None,
    ) -> None:
        self._client = client or openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def for_azure(
        cls,
        *,
        endpoint: str,
        api_key: str,
        api_version: str,
        timeout_seconds: int,
    ) -> "OpenAIClientAdapter":
        return cls(
            client=openai.AzureOpenAI(
                azure_endpoint=endpoint,
                api_key=api_key,
                api_version=api_version,
                timeout=timeout_seconds,
            )
        )

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
        messages: list[dict[str, object]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": self._user_content(user_prompt, images)})

        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=messages,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise LlmUnavailableError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise LlmUnavailableError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise LlmUnavailableError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise LlmUnavailableError("AI returned empty response")
        return content

    @staticmethod
    def _user_content(user_prompt: str, images: list[bytes] | None) -> str | list[dict[str, object]]:
        if not images:
            return user_prompt
        parts: list[dict[str, object]] = [{"type": "text", "text": user_prompt}]
        for image in images:
            encoded = base64.b64encode(image).decode("ascii")
            parts.append(
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:image/png;base64,{encoded}", "detail": "high"},
                }
            )
        return parts
