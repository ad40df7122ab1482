"""Renders the extraction instruction sent to the LLM.

Building is a pure function of (text, schema): the same input always
yields the same prompt string.
"""

import json
from pathlib import Path

from medcommittee.llm.prompt_loader import load_prompt_template, load_vision_instruction
from medcommittee.llm.schema import COMMITTEE_SCHEMA, ExtractionSchema

TRUNCATION_MARKER = "..."


class PromptBuilder:
    def __init__(
        self,
        *,
        max_text_chars: int = 15000,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._max_text_chars = max_text_chars
        self._template = load_prompt_template(prompt_template_path)
        self._vision_instruction = load_vision_instruction()

    def build(self, text: str, schema: ExtractionSchema = COMMITTEE_SCHEMA) -> str:
        return self._template.format(
            document_text=self.truncate(text),
            field_notes=self.field_notes(schema),
            json_template=self.json_template(schema),
        )

    def build_for_images(self, schema: ExtractionSchema = COMMITTEE_SCHEMA) -> str:
        """Prompt for multimodal requests, where the page images replace the text."""
        return f"{self.build('', schema)}\n\n{self._vision_instruction}"

    def truncate(self, text: str) -> str:
        if len(text) <= self._max_text_chars:
            return text
        return text[: self._max_text_chars] + TRUNCATION_MARKER

    @staticmethod
    def field_notes(schema: ExtractionSchema) -> str:
        return "\n".join(f"- {spec.name}: {spec.hint}" for spec in schema.fields if spec.hint)

    @staticmethod
    def json_template(schema: ExtractionSchema) -> str:
        template: dict[str, object] = {}
        for name in schema.keys():
            if name == schema.decisions_field:
                template[name] = [{key: "..." for key in schema.decision_fields}]
            else:
                template[name] = "..."
        return json.dumps(template, ensure_ascii=False, indent=2)
