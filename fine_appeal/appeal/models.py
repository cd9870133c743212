from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class FineRecord:
    """Fine data extracted from a document. Unknown fields are empty strings."""

    reference_number: str = ""
    date: str = ""
    amount: str = ""
    location: str = ""
    reason: str = ""
    vehicle: str = ""
    additional_info: str = ""

    def to_dict(self) -> dict[str, str]:
        """Wire representation with the camelCase keys clients exchange."""
        return {
            "referenceNumber": self.reference_number,
            "date": self.date,
            "amount": self.amount,
            "location": self.location,
            "reason": self.reason,
            "vehicle": self.vehicle,
            "additionalInfo": self.additional_info,
        }


class AppealType(str, Enum):
    PROCEDURAL = "procedural"
    FACTUAL = "factual"
    LEGAL = "legal"
    COMPREHENSIVE = "comprehensive"

    @classmethod
    def parse(cls, value: "str | AppealType | None") -> "AppealType":
        """Resolve a client-supplied type, falling back to comprehensive."""
        if isinstance(value, AppealType):
            return value
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.COMPREHENSIVE


@dataclass(frozen=True)
class AppealOptions:
    """User choices that shape the generated appeal."""

    appeal_type: AppealType = AppealType.COMPREHENSIVE
    custom_details: str = ""
    include_template_text: bool = True


@dataclass(frozen=True)
class AppealDocument:
    """Generated appeal body plus the fine metadata used for export."""

    text: str
    appeal_type: AppealType
    reference_number: str = ""
    date: str = ""
    fine: FineRecord | None = None

    @classmethod
    def for_fine(
        cls,
        text: str,
        fine: FineRecord,
        appeal_type: AppealType = AppealType.COMPREHENSIVE,
    ) -> "AppealDocument":
        return cls(
            text=text,
            appeal_type=appeal_type,
            reference_number=fine.reference_number,
            date=fine.date,
            fine=fine,
        )
