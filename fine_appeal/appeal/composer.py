from fine_appeal.appeal.models import AppealDocument, AppealOptions, AppealType, FineRecord
from fine_appeal.config.settings import Settings
from fine_appeal.extraction.extractor import ContentExtractor
from fine_appeal.extraction.image_transcoder import ImageTranscoder
from fine_appeal.inference.client_base import BaseInferenceClient
from fine_appeal.inference.factory import InferenceClientFactory
from fine_appeal.logging.logger import Log
from fine_appeal.parsing.response_parser import StructuredResponseParser
from fine_appeal.pdf.factory import PdfExtractorFactory
from fine_appeal.prompts.builder import PromptBuilder
from fine_appeal.upload.models import UploadedFile
from fine_appeal.upload.validator import FileValidator


class AppealComposer:
    """Orchestrates the two stateless pipeline stages.

    Extraction: validate -> extract -> prompt -> infer -> parse (JSON).
    Generation: prompt -> infer -> parse (text).
    Any failure aborts the stage with a typed error; nothing partial is returned.
    """

    def __init__(
        self,
        *,
        validator: FileValidator,
        extractor: ContentExtractor,
        prompt_builder: PromptBuilder,
        client: BaseInferenceClient,
        parser: StructuredResponseParser,
    ) -> None:
        self._validator = validator
        self._extractor = extractor
        self._prompt_builder = prompt_builder
        self._client = client
        self._parser = parser

    def analyze_fine(self, file: UploadedFile) -> FineRecord:
        """Extract a FineRecord from an uploaded fine document."""
        Log.info(
            f"Analyzing upload {file.filename or '<unnamed>'} "
            f"({file.mime_type}, {file.actual_size} bytes)"
        )
        with Log.stage("analyze_fine"):
            self._validator.check(file)

            content = self._extractor.extract(file)
            prompt = self._prompt_builder.build_extraction_prompt(content)
            Log.debug(f"Extraction prompt:\n{prompt.user_prompt}")

            raw_response = self._client.extract_structured(prompt)
            Log.debug(f"AI raw extraction response:\n{raw_response}")

            record = self._parser.parse_fine_record(raw_response)
        Log.info(f"Extracted fine {record.reference_number or '<no reference>'}")
        return record

    def generate_appeal(self, record: FineRecord, options: AppealOptions) -> AppealDocument:
        """Generate an appeal letter for a previously extracted fine."""
        appeal_type = AppealType.parse(options.appeal_type)
        Log.info(
            f"Generating {appeal_type.value} appeal for fine "
            f"{record.reference_number or '<no reference>'}"
        )
        with Log.stage("generate_appeal"):
            prompt = self._prompt_builder.build_appeal_prompt(record, options)
            Log.debug(f"Appeal prompt:\n{prompt.user_prompt}")

            raw_response = self._client.generate_text(prompt)
            text = self._parser.parse_appeal_text(raw_response)

        Log.info(f"Appeal generated: {len(text)} chars")
        return AppealDocument.for_fine(text, record, appeal_type)


def build_composer(settings: Settings) -> AppealComposer:
    """Build an AppealComposer with all required adapters.

    Raises:
        ConfigurationError: if the inference provider cannot be configured.
    """
    extractor = ContentExtractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        image_transcoder=ImageTranscoder(
            max_dimension=settings.image_max_dimension,
            quality=settings.image_jpeg_quality,
            max_pixels=settings.image_max_pixels,
        ),
    )
    return AppealComposer(
        validator=FileValidator(max_size_bytes=settings.max_upload_size_bytes),
        extractor=extractor,
        prompt_builder=PromptBuilder(),
        client=InferenceClientFactory.create(settings),
        parser=StructuredResponseParser(),
    )
