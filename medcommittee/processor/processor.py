from collections.abc import Callable

from medcommittee.config.settings import Settings
from medcommittee.documents.models import RawDocument, StructuredRecord
from medcommittee.extraction.exceptions import ExtractionExhaustedError
from medcommittee.extraction.factory import CascadeFactory
from medcommittee.extraction.rasterizer import PageRasterizer
from medcommittee.llm.factory import LlmClientFactory
from medcommittee.llm.prompt_builder import PromptBuilder
from medcommittee.llm.response_normalizer import ResponseNormalizer
from medcommittee.llm.schema import COMMITTEE_SCHEMA, ExtractionSchema
from medcommittee.logging.logger import Log
from medcommittee.ocr.factory import OcrClientFactory
from medcommittee.processor.pipeline import PipelineContext, PipelineStep, StatusListener
from medcommittee.processor.steps import (
    BuildPromptStep,
    CheckReadabilityStep,
    CompleteLlmStep,
    CompleteVisionStep,
    ExtractTextStep,
    MarkCompletedStep,
    MarkFailedStep,
    MarkProcessingStep,
    NormalizeResponseStep,
    RenderPagesStep,
)
from medcommittee.readability.filter import TextReadabilityFilter


class DocumentProcessor:
    """Runs one document through the extraction pipeline.

    Pipeline: mark processing -> extract text -> readability gate -> prompt
    -> LLM -> normalize -> mark completed. Any failure runs ``failed_step``
    instead; ``process`` itself never raises. When the text cascade is
    exhausted and ``fallback_steps`` are configured, they run in place of
    the remaining text steps. ``close`` releases the adapters registered in
    ``closers`` once the batch is done.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep,
        fallback_steps: list[PipelineStep] | None = None,
        schema: ExtractionSchema = COMMITTEE_SCHEMA,
        closers: list[Callable[[], None]] | None = None,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step
        self._fallback_steps = fallback_steps or []
        self._schema = schema
        self._closers = closers or []

    def process(self, document: RawDocument) -> StructuredRecord:
        """Return the document's record in a terminal state."""
        Log.info(f"Processing document {document.file_name}")
        record = StructuredRecord(file_name=document.file_name, fields=self._schema.empty_fields())
        context = PipelineContext(document=document, record=record)
        try:
            try:
                context = self._run(self._steps, context)
            except ExtractionExhaustedError as exc:
                if not self._fallback_steps:
                    raise
                Log.warning(f"{exc}; trying image-based extraction")
                context = self._run(self._fallback_steps, context)
        except Exception as exc:
            context.error_message = str(exc)
            self._failed_step.run(context)
        return context.record

    def close(self) -> None:
        for closer in self._closers:
            try:
                closer()
            except Exception as exc:
                Log.warning(f"Failed to release adapter: {exc}")

    @staticmethod
    def _run(steps: list[PipelineStep], context: PipelineContext) -> PipelineContext:
        for step in steps:
            context = step.run(context)
        return context


def build_processor(
    settings: Settings,
    listener: StatusListener | None = None,
) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    schema = COMMITTEE_SCHEMA
    rasterizer = PageRasterizer(settings.ocr_render_scale)
    ocr_client = OcrClientFactory.create(settings)
    cascade = CascadeFactory.create(settings, ocr_client, rasterizer)
    prompt_builder = PromptBuilder(max_text_chars=settings.prompt_max_chars)
    llm_client = LlmClientFactory.create(settings)
    normalizer = ResponseNormalizer(schema)

    steps: list[PipelineStep] = [
        MarkProcessingStep(listener),
        ExtractTextStep(cascade),
        CheckReadabilityStep(TextReadabilityFilter(settings.readability_threshold)),
        BuildPromptStep(prompt_builder, normalizer),
        CompleteLlmStep(llm_client),
        NormalizeResponseStep(normalizer),
        MarkCompletedStep(listener),
    ]
    fallback_steps: list[PipelineStep] = []
    if settings.vision_fallback_enabled:
        fallback_steps = [
            RenderPagesStep(rasterizer, settings.vision_max_pages),
            CompleteVisionStep(llm_client, prompt_builder, normalizer),
            NormalizeResponseStep(normalizer),
            MarkCompletedStep(listener),
        ]
    return DocumentProcessor(
        steps=steps,
        failed_step=MarkFailedStep(listener),
        fallback_steps=fallback_steps,
        schema=schema,
        closers=[ocr_client.close] if ocr_client is not None else [],
    )
