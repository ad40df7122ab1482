from medcommittee.documents.models import ProcessingStatus
from medcommittee.extraction.cascade import TextExtractionCascade
from medcommittee.extraction.rasterizer import PageRasterizer
from medcommittee.llm.exceptions import LlmError
from medcommittee.llm.extraction_client import LlmExtractionClient
from medcommittee.llm.prompt_builder import PromptBuilder
from medcommittee.llm.response_normalizer import ResponseNormalizer
from medcommittee.logging.logger import Log
from medcommittee.processor.pipeline import PipelineContext, PipelineStep, StatusListener
from medcommittee.readability.filter import TextReadabilityFilter
from medcommittee.readability.text_utils import clean_hebrew_text


class _NotifyingStep(PipelineStep):
    def __init__(self, listener: StatusListener | None = None) -> None:
        self._listener = listener

    def _notify(self, context: PipelineContext) -> None:
        if self._listener is not None:
            self._listener(context.record)


class MarkProcessingStep(_NotifyingStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.record.mark_processing()
        Log.info(f"Document {context.document.file_name} marked as processing")
        self._notify(context)
        return context


class MarkCompletedStep(_NotifyingStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.normalized is None:
            raise ValueError("PipelineContext.normalized must be set before completion")
        context.record.mark_completed(context.normalized.fields, context.normalized.decisions)
        Log.info(f"Document {context.document.file_name} completed")
        self._notify(context)
        return context


class MarkFailedStep(_NotifyingStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record.is_terminal:
            Log.warning(
                f"Document {context.document.file_name} already "
                f"{context.record.processing_status.value}: {context.error_message}"
            )
            return context
        if context.record.processing_status is ProcessingStatus.PENDING:
            context.record.mark_processing()
        context.record.mark_error(context.error_message)
        Log.error(
            f"Document {context.document.file_name} marked as failed: {context.error_message}"
        )
        self._notify(context)
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, cascade: TextExtractionCascade) -> None:
        self._cascade = cascade

    def run(self, context: PipelineContext) -> PipelineContext:
        context.extracted = self._cascade.extract(context.document)
        context.record.extraction_strategy = context.extracted.strategy
        Log.info(
            f"Extracted {len(context.extracted)} chars from {context.document.file_name} "
            f"via {context.extracted.strategy}"
        )
        return context


class CheckReadabilityStep(PipelineStep):
    """Cleans the extracted text and rejects it when it scores below the gate."""

    def __init__(self, readability_filter: TextReadabilityFilter) -> None:
        self._filter = readability_filter

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before readability check")
        context.cleaned_text = clean_hebrew_text(context.extracted.text)
        context.readability_score = self._filter.check(context.cleaned_text)
        Log.info(
            f"Readability of {context.document.file_name}: {context.readability_score:.1f}"
        )
        return context


class BuildPromptStep(PipelineStep):
    def __init__(self, prompt_builder: PromptBuilder, normalizer: ResponseNormalizer) -> None:
        self._prompt_builder = prompt_builder
        self._schema = normalizer.schema

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before prompt building")
        context.prompt = self._prompt_builder.build(context.cleaned_text, self._schema)
        return context


class CompleteLlmStep(PipelineStep):
    def __init__(self, llm_client: LlmExtractionClient) -> None:
        self._llm_client = llm_client

    def run(self, context: PipelineContext) -> PipelineContext:
        context.raw_response = self._llm_client.complete(context.prompt)
        return context


class NormalizeResponseStep(PipelineStep):
    def __init__(self, normalizer: ResponseNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.normalized = self._normalizer.normalize(context.raw_response)
        filled = sum(1 for value in context.normalized.fields.values() if value)
        Log.info(
            f"Normalized {context.document.file_name}: {filled} fields filled, "
            f"{len(context.normalized.decisions)} decisions ({context.normalized.parse_path})"
        )
        return context


class RenderPagesStep(PipelineStep):
    """Rasterizes the first pages for image-based extraction."""

    def __init__(self, rasterizer: PageRasterizer, max_pages: int) -> None:
        self._rasterizer = rasterizer
        self._max_pages = max_pages

    def run(self, context: PipelineContext) -> PipelineContext:
        context.page_images = list(self._rasterizer.render(context.document, self._max_pages))
        if not context.page_images:
            raise LlmError(f"No page images could be rendered for {context.document.file_name}")
        return context


class CompleteVisionStep(PipelineStep):
    def __init__(
        self,
        llm_client: LlmExtractionClient,
        prompt_builder: PromptBuilder,
        normalizer: ResponseNormalizer,
    ) -> None:
        self._llm_client = llm_client
        self._prompt_builder = prompt_builder
        self._schema = normalizer.schema

    def run(self, context: PipelineContext) -> PipelineContext:
        context.prompt = self._prompt_builder.build_for_images(self._schema)
        context.raw_response = self._llm_client.complete_with_images(
            context.prompt, context.page_images
        )
        context.record.extraction_strategy = "vision"
        return context
