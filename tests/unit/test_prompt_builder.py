from pathlib import Path

import pytest

from fine_appeal.appeal.models import AppealOptions, AppealType, FineRecord
from fine_appeal.exceptions import ConfigurationError
from fine_appeal.extraction.models import ImageContent, TextContent
from fine_appeal.prompts.builder import (
    APPEAL_SYSTEM_PROMPT,
    EXTRACTION_SYSTEM_PROMPT,
    PromptBuilder,
)

RECORD = FineRecord(
    reference_number="PCN-2024-0042",
    date="2024-03-15",
    amount="65.00 EUR",
    location="12 Main Street",
    reason="Parked in a loading bay",
    vehicle="AB 123 CD",
)


@pytest.fixture()
def builder() -> PromptBuilder:
    return PromptBuilder()


class TestBuildExtractionPrompt:
    def test_text_content_is_embedded(self, builder: PromptBuilder) -> None:
        prompt = builder.build_extraction_prompt(TextContent(text="Ticket 123"))
        assert "Document text:\nTicket 123" in prompt.user_prompt
        assert prompt.image is None
        assert prompt.system_prompt == EXTRACTION_SYSTEM_PROMPT

    def test_image_content_is_attached(self, builder: PromptBuilder) -> None:
        image = ImageContent(data=b"jpeg", mime_type="image/jpeg", width=1, height=1)
        prompt = builder.build_extraction_prompt(image)
        assert prompt.image is image
        assert "attached as an image" in prompt.user_prompt

    def test_schema_is_attached(self, builder: PromptBuilder) -> None:
        prompt = builder.build_extraction_prompt(TextContent(text="x"))
        assert prompt.json_schema is not None
        assert "referenceNumber" in prompt.json_schema["properties"]  # type: ignore[operator]

    def test_names_every_field(self, builder: PromptBuilder) -> None:
        prompt = builder.build_extraction_prompt(TextContent(text="x"))
        for name in ("referenceNumber", "date", "amount", "location", "reason", "vehicle"):
            assert f'"{name}"' in prompt.user_prompt

    def test_is_deterministic(self, builder: PromptBuilder) -> None:
        content = TextContent(text="Same input")
        assert builder.build_extraction_prompt(content) == builder.build_extraction_prompt(content)
        assert PromptBuilder().build_extraction_prompt(content) == builder.build_extraction_prompt(
            content
        )


class TestBuildAppealPrompt:
    def test_includes_fine_fields(self, builder: PromptBuilder) -> None:
        prompt = builder.build_appeal_prompt(RECORD, AppealOptions())
        for value in ("PCN-2024-0042", "2024-03-15", "65.00 EUR", "12 Main Street", "AB 123 CD"):
            assert value in prompt.user_prompt
        assert prompt.system_prompt == APPEAL_SYSTEM_PROMPT
        assert prompt.image is None
        assert prompt.json_schema is None

    @pytest.mark.parametrize("appeal_type", list(AppealType))
    def test_strategy_matches_type(self, builder: PromptBuilder, appeal_type: AppealType) -> None:
        prompt = builder.build_appeal_prompt(RECORD, AppealOptions(appeal_type=appeal_type))
        assert PromptBuilder.STRATEGIES[appeal_type] in prompt.user_prompt
        assert f"Appeal Type: {appeal_type.value}" in prompt.user_prompt

    def test_strategies_differ(self) -> None:
        assert len(set(PromptBuilder.STRATEGIES.values())) == len(AppealType)

    def test_unknown_type_falls_back_to_comprehensive(self, builder: PromptBuilder) -> None:
        options = AppealOptions(appeal_type="creative")  # type: ignore[arg-type]
        prompt = builder.build_appeal_prompt(RECORD, options)
        assert PromptBuilder.STRATEGIES[AppealType.COMPREHENSIVE] in prompt.user_prompt

    def test_template_text_requests_placeholders(self, builder: PromptBuilder) -> None:
        prompt = builder.build_appeal_prompt(RECORD, AppealOptions(include_template_text=True))
        assert PromptBuilder.PLACEHOLDER_INSTRUCTION in prompt.user_prompt
        assert PromptBuilder.FIRST_PERSON_INSTRUCTION not in prompt.user_prompt

    def test_without_template_text_requests_first_person(self, builder: PromptBuilder) -> None:
        prompt = builder.build_appeal_prompt(RECORD, AppealOptions(include_template_text=False))
        assert PromptBuilder.FIRST_PERSON_INSTRUCTION in prompt.user_prompt
        assert PromptBuilder.PLACEHOLDER_INSTRUCTION not in prompt.user_prompt

    def test_custom_details_included_verbatim(self, builder: PromptBuilder) -> None:
        details = "The sign was covered by a {tree} branch."
        prompt = builder.build_appeal_prompt(RECORD, AppealOptions(custom_details=details))
        assert f'"{details}"' in prompt.user_prompt

    def test_blank_custom_details_omitted(self, builder: PromptBuilder) -> None:
        prompt = builder.build_appeal_prompt(RECORD, AppealOptions(custom_details="   "))
        assert "specific details from the appellant" not in prompt.user_prompt

    def test_additional_info_line(self, builder: PromptBuilder) -> None:
        record = FineRecord(reference_number="R1", additional_info="Issued by warden 7")
        prompt = builder.build_appeal_prompt(record, AppealOptions())
        assert "- Additional information: Issued by warden 7" in prompt.user_prompt
        bare = builder.build_appeal_prompt(RECORD, AppealOptions())
        assert "Additional information" not in bare.user_prompt

    def test_is_deterministic(self, builder: PromptBuilder) -> None:
        options = AppealOptions(appeal_type=AppealType.LEGAL, custom_details="Late notice")
        assert builder.build_appeal_prompt(RECORD, options) == builder.build_appeal_prompt(
            RECORD, options
        )


class TestPromptBuilderConfiguration:
    def test_custom_extraction_template(self, tmp_path: Path) -> None:
        path = tmp_path / "extract.txt"
        path.write_text("EXTRACT >> {document_section}", encoding="utf-8")
        builder = PromptBuilder(extraction_template_path=path)
        prompt = builder.build_extraction_prompt(TextContent(text="abc"))
        assert prompt.user_prompt == "EXTRACT >> Document text:\nabc"

    def test_missing_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            PromptBuilder(appeal_template_path=tmp_path / "missing.txt")
