import pytest

from fine_appeal.appeal.models import FineRecord
from fine_appeal.exceptions import ParseError
from fine_appeal.parsing.response_parser import StructuredResponseParser

RAW = (
    '{"referenceNumber":"A1","date":"2024-01-01","amount":"50",'
    '"location":"X","reason":"Y","vehicle":"Z"}'
)


@pytest.fixture()
def parser() -> StructuredResponseParser:
    return StructuredResponseParser()


class TestParseFineRecord:
    def test_parses_exact_fields(self, parser: StructuredResponseParser) -> None:
        record = parser.parse_fine_record(RAW)
        assert record == FineRecord(
            reference_number="A1",
            date="2024-01-01",
            amount="50",
            location="X",
            reason="Y",
            vehicle="Z",
            additional_info="",
        )

    def test_strips_code_fences(self, parser: StructuredResponseParser) -> None:
        record = parser.parse_fine_record(f"```json\n{RAW}\n```")
        assert record.reference_number == "A1"

    def test_tolerates_surrounding_whitespace(self, parser: StructuredResponseParser) -> None:
        assert parser.parse_fine_record(f"\n  {RAW}  \n").amount == "50"

    @pytest.mark.parametrize(
        "raw",
        ["Sorry, I can't help", "", "   ", '{"referenceNumber": "A1"', "null"],
    )
    def test_malformed_text_raises(self, parser: StructuredResponseParser, raw: str) -> None:
        with pytest.raises(ParseError):
            parser.parse_fine_record(raw)

    def test_prose_reports_invalid_json(self, parser: StructuredResponseParser) -> None:
        with pytest.raises(ParseError, match="Invalid JSON response"):
            parser.parse_fine_record("Sorry, I can't help")

    def test_array_is_not_a_record(self, parser: StructuredResponseParser) -> None:
        with pytest.raises(ParseError, match="must be an object"):
            parser.parse_fine_record(f"[{RAW}]")

    def test_missing_field_raises(self, parser: StructuredResponseParser) -> None:
        with pytest.raises(ParseError, match="vehicle"):
            parser.parse_fine_record('{"referenceNumber":"A1","date":"","amount":"",'
                                     '"location":"","reason":""}')


class TestParseAppealText:
    def test_trims_text(self, parser: StructuredResponseParser) -> None:
        assert parser.parse_appeal_text("\n Dear Sir,\n\nRegards \n") == "Dear Sir,\n\nRegards"

    def test_keeps_markup(self, parser: StructuredResponseParser) -> None:
        assert parser.parse_appeal_text("**Re:** fine") == "**Re:** fine"

    @pytest.mark.parametrize("raw", ["", "  \n\t "])
    def test_empty_text_raises(self, parser: StructuredResponseParser, raw: str) -> None:
        with pytest.raises(ParseError, match="empty"):
            parser.parse_appeal_text(raw)
