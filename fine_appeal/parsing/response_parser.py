import json

from fine_appeal.appeal.models import FineRecord
from fine_appeal.exceptions import ParseError
from fine_appeal.logging.logger import Log
from fine_appeal.parsing.validator import validate_and_build


class StructuredResponseParser:
    """Turns raw inference text into a FineRecord or an appeal body."""

    def parse_fine_record(self, raw: str) -> FineRecord:
        """Strictly parse extraction output. No guessing at malformed output.

        Raises:
            ParseError: if the text is not a JSON object with the expected fields.
        """
        parsed = self._parse_json(raw)
        record = validate_and_build(parsed)
        Log.debug(f"Parsed fine record {record.reference_number!r}")
        return record

    def parse_appeal_text(self, raw: str) -> str:
        """Return the trimmed appeal body.

        Raises:
            ParseError: if nothing remains after trimming.
        """
        text = (raw or "").strip()
        if not text:
            raise ParseError("Appeal text is empty")
        return text

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = (raw or "").strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ParseError("JSON response must be an object")
        return parsed
