"""Deterministic prompt construction for both pipeline stages.

Identical inputs always yield identical prompts: templates are loaded once,
and nothing time- or randomness-dependent is interpolated.
"""

import json
from pathlib import Path
from typing import ClassVar

from fine_appeal.appeal.models import AppealOptions, AppealType, FineRecord
from fine_appeal.extraction.models import ExtractedContent, ImageContent, TextContent
from fine_appeal.inference.models import PromptSpec
from fine_appeal.prompts.prompt_loader import load_json_schema, load_prompt_template

EXTRACTION_SYSTEM_PROMPT = (
    "You are an expert in analyzing traffic and parking tickets or fines."
)
APPEAL_SYSTEM_PROMPT = (
    "You are an expert legal assistant specializing in traffic and parking fine appeals."
)


class PromptBuilder:
    """Builds PromptSpecs for fine extraction and appeal generation."""

    STRATEGIES: ClassVar[dict[AppealType, str]] = {
        AppealType.PROCEDURAL: (
            "Focus on procedural errors in how the fine was issued or processed. "
            "Highlight issues with the documentation, procedure, or notification."
        ),
        AppealType.FACTUAL: (
            "Dispute the factual circumstances of the fine. "
            "Question the accuracy of the alleged violation."
        ),
        AppealType.LEGAL: (
            "Emphasize legal arguments and cite relevant laws and regulations "
            "that may invalidate the fine."
        ),
        AppealType.COMPREHENSIVE: (
            "Include procedural, factual, and legal arguments for a comprehensive appeal."
        ),
    }

    PLACEHOLDER_INSTRUCTION: ClassVar[str] = (
        "Include placeholders for personal information like [Your Name], "
        "[Your Address], etc."
    )
    FIRST_PERSON_INSTRUCTION: ClassVar[str] = (
        'Use "I" and "my" pronouns without placeholders.'
    )

    def __init__(
        self,
        *,
        extraction_template_path: Path | None = None,
        appeal_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._extraction_template = load_prompt_template(
            "extraction_prompt.txt", extraction_template_path
        )
        self._appeal_template = load_prompt_template(
            "appeal_prompt.txt", appeal_template_path
        )
        self._json_schema: dict[str, object] = json.loads(load_json_schema(json_schema_path))

    def build_extraction_prompt(self, content: ExtractedContent) -> PromptSpec:
        if isinstance(content, TextContent):
            section = f"Document text:\n{content.text}"
            image: ImageContent | None = None
        else:
            section = "The fine document is attached as an image."
            image = content
        return PromptSpec(
            system_prompt=EXTRACTION_SYSTEM_PROMPT,
            user_prompt=self._extraction_template.format(document_section=section),
            image=image,
            json_schema=self._json_schema,
        )

    def build_appeal_prompt(self, record: FineRecord, options: AppealOptions) -> PromptSpec:
        appeal_type = AppealType.parse(options.appeal_type)
        additional_info_line = (
            f"\n- Additional information: {record.additional_info}"
            if record.additional_info
            else ""
        )
        custom_details = (
            "\nAlso incorporate these specific details from the appellant: "
            f'"{options.custom_details}"'
            if options.custom_details and options.custom_details.strip()
            else ""
        )
        personal_details_instruction = (
            self.PLACEHOLDER_INSTRUCTION
            if options.include_template_text
            else self.FIRST_PERSON_INSTRUCTION
        )
        user_prompt = self._appeal_template.format(
            reference_number=record.reference_number,
            date=record.date,
            amount=record.amount,
            location=record.location,
            reason=record.reason,
            vehicle=record.vehicle,
            additional_info_line=additional_info_line,
            appeal_type=appeal_type.value,
            strategy=self.STRATEGIES[appeal_type],
            custom_details=custom_details,
            personal_details_instruction=personal_details_instruction,
        )
        return PromptSpec(system_prompt=APPEAL_SYSTEM_PROMPT, user_prompt=user_prompt)
