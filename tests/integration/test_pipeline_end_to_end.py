import json
import re

import pytest

from fine_appeal.appeal.composer import AppealComposer
from fine_appeal.appeal.models import AppealOptions, AppealType
from fine_appeal.extraction.extractor import ContentExtractor
from fine_appeal.extraction.image_transcoder import ImageTranscoder
from fine_appeal.inference.client_base import BaseInferenceClient
from fine_appeal.inference.models import PromptSpec
from fine_appeal.parsing.response_parser import StructuredResponseParser
from fine_appeal.pdf.base import BasePdfExtractor
from fine_appeal.pdf.pdfplumber_adapter import PdfPlumberAdapter
from fine_appeal.pdf.pymupdf_adapter import PyMuPdfAdapter
from fine_appeal.prompts.builder import PromptBuilder
from fine_appeal.rendering.renderer import MarkupRenderer
from fine_appeal.upload.models import UploadedFile
from fine_appeal.upload.validator import FileValidator


class ScriptedInferenceClient(BaseInferenceClient):
    """Reads fine fields back out of the extraction prompt.

    Lets the pipeline run end to end without a network call while still
    depending on the real document text reaching the prompt.
    """

    FIELDS = {
        "referenceNumber": r"Reference Number:\s*(\S+)",
        "date": r"Date of contravention:\s*(\S+)",
        "amount": r"Amount due:\s*(.+)",
        "location": r"Location:\s*(.+)",
        "reason": r"Reason:\s*(.+)",
        "vehicle": r"Vehicle registration:\s*(.+)",
    }

    def __init__(self) -> None:
        self.prompts: list[PromptSpec] = []

    def extract_structured(self, prompt: PromptSpec) -> str:
        self.prompts.append(prompt)
        values = {}
        for key, pattern in self.FIELDS.items():
            match = re.search(pattern, prompt.user_prompt)
            values[key] = match.group(1).strip() if match else ""
        return "```json\n" + json.dumps(values) + "\n```"

    def generate_text(self, prompt: PromptSpec) -> str:
        self.prompts.append(prompt)
        match = re.search(r"Reference/Ticket Number:\s*(\S+)", prompt.user_prompt)
        reference = match.group(1) if match else "unknown"
        paragraph = (
            "The contravention did not occur as described. The vehicle was "
            "**lawfully stopped** to unload goods and the bay was _clearly unmarked_."
        )
        body = "\n\n".join(paragraph for _ in range(60))
        return (
            "Dear Sir or Madam,\n\n"
            f"**Re: {reference}**\n\n"
            f"{body}\n\n"
            "_Yours faithfully,_\n[Your Name]\n"
        )


@pytest.fixture()
def scripted_client() -> ScriptedInferenceClient:
    return ScriptedInferenceClient()


def _composer(client: ScriptedInferenceClient, pdf_extractor: BasePdfExtractor) -> AppealComposer:
    return AppealComposer(
        validator=FileValidator(),
        extractor=ContentExtractor(pdf_extractor, ImageTranscoder()),
        prompt_builder=PromptBuilder(),
        client=client,
        parser=StructuredResponseParser(),
    )


@pytest.mark.integration
class TestFineToAppealPipeline:
    @pytest.mark.parametrize("pdf_extractor", [PdfPlumberAdapter(), PyMuPdfAdapter()])
    def test_two_page_pdf_to_paginated_appeal(
        self,
        fine_pdf_bytes: bytes,
        scripted_client: ScriptedInferenceClient,
        pdf_extractor: BasePdfExtractor,
    ) -> None:
        composer = _composer(scripted_client, pdf_extractor)
        upload = UploadedFile(
            content=fine_pdf_bytes,
            mime_type="application/pdf",
            size_bytes=len(fine_pdf_bytes),
            filename="notice.pdf",
        )

        record = composer.analyze_fine(upload)
        assert record.reference_number == "PCN-2024-0042"
        assert record.amount == "65.00 EUR"
        assert record.vehicle == "AB 123 CD"

        document = composer.generate_appeal(
            record, AppealOptions(appeal_type=AppealType.FACTUAL)
        )
        assert document.text
        assert document.appeal_type is AppealType.FACTUAL
        assert PromptBuilder.STRATEGIES[AppealType.FACTUAL] in scripted_client.prompts[-1].user_prompt

        pages = MarkupRenderer().layout(document)
        assert len(pages) >= 1
        for page in pages:
            assert "PCN-2024-0042" in page.footer_lines[0]
            assert page.footer_lines[1].endswith(f"page {page.number} of {len(pages)}")

    def test_photo_of_fine_is_sent_as_bounded_image(
        self,
        large_png_bytes: bytes,
        scripted_client: ScriptedInferenceClient,
    ) -> None:
        composer = _composer(scripted_client, PdfPlumberAdapter())
        record = composer.analyze_fine(
            UploadedFile(content=large_png_bytes, mime_type="image/png")
        )
        prompt = scripted_client.prompts[-1]
        assert prompt.image is not None
        assert prompt.image.mime_type == "image/jpeg"
        assert max(prompt.image.width, prompt.image.height) <= 1200
        assert record.reference_number == ""

    def test_appeal_exports_as_pdf_and_text(
        self,
        fine_pdf_bytes: bytes,
        scripted_client: ScriptedInferenceClient,
    ) -> None:
        composer = _composer(scripted_client, PdfPlumberAdapter())
        record = composer.analyze_fine(
            UploadedFile(content=fine_pdf_bytes, mime_type="application/pdf")
        )
        document = composer.generate_appeal(record, AppealOptions())
        renderer = MarkupRenderer()

        pdf = renderer.render_pdf(document)
        assert pdf.content.startswith(b"%PDF")
        assert pdf.filename == "appeal_PCN-2024-0042.pdf"

        text = renderer.render_text(document).content.decode("utf-8")
        assert "**" not in text
        assert "Re: PCN-2024-0042" in text
