"""Example LLM client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseLlmClient and register the provider in LlmClientFactory.
"""

import json
from typing import ClassVar

from medcommittee.llm.client_base import BaseLlmClient


class ExampleClientAdapter(BaseLlmClient):
    """Example adapter that returns a fixed committee record as JSON.

    No network calls. Useful for local runs and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "כותרת הועדה": "פרוטוקול ועדה רפואית",
        "סוג ועדה": "ועדה רפואית",
        "שם טופס": "נכות כללית",
        "שם המבוטח": "ישראל ישראלי",
        "ת.ז:": "000000018",
        "תאריך ועדה": "01/01/2024",
        "משתתפי הועדה": [{"שם": "ד\"ר כהן", "תפקיד": "יו\"ר"}],
        "החלטות": [],
    }

    def __init__(self) -> None:
        self.calls = 0

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
        _ = model, temperature, system_prompt, user_prompt, max_tokens, images
        self.calls += 1
        return json.dumps(self.DEFAULT_RESPONSE, ensure_ascii=False)
