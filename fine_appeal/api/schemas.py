from pydantic import BaseModel, ConfigDict, Field

from fine_appeal.appeal.models import (
    AppealDocument,
    AppealOptions,
    AppealType,
    FineRecord,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FineInfoPayload(_CamelModel):
    reference_number: str = Field(default="", alias="referenceNumber")
    date: str = ""
    amount: str = ""
    location: str = ""
    reason: str = ""
    vehicle: str = ""
    additional_info: str = Field(default="", alias="additionalInfo")

    def to_record(self) -> FineRecord:
        return FineRecord(
            reference_number=self.reference_number.strip(),
            date=self.date.strip(),
            amount=self.amount.strip(),
            location=self.location.strip(),
            reason=self.reason.strip(),
            vehicle=self.vehicle.strip(),
            additional_info=self.additional_info.strip(),
        )


class AppealOptionsPayload(_CamelModel):
    appeal_type: str = Field(default=AppealType.COMPREHENSIVE.value, alias="appealType")
    custom_details: str | None = Field(default=None, alias="customDetails")
    include_template_text: bool = Field(default=True, alias="includeTemplateText")

    def to_options(self) -> AppealOptions:
        return AppealOptions(
            appeal_type=AppealType.parse(self.appeal_type),
            custom_details=self.custom_details or "",
            include_template_text=self.include_template_text,
        )


class GenerateAppealRequest(_CamelModel):
    fine_info: FineInfoPayload = Field(alias="fineInfo")
    appeal_options: AppealOptionsPayload = Field(alias="appealOptions")


class ExportRequest(_CamelModel):
    appeal_text: str = Field(alias="appealText", min_length=1)
    fine_info: FineInfoPayload | None = Field(default=None, alias="fineInfo")
    appeal_type: str = Field(default=AppealType.COMPREHENSIVE.value, alias="appealType")

    def to_document(self) -> AppealDocument:
        appeal_type = AppealType.parse(self.appeal_type)
        if self.fine_info is None:
            return AppealDocument(text=self.appeal_text, appeal_type=appeal_type)
        return AppealDocument.for_fine(self.appeal_text, self.fine_info.to_record(), appeal_type)
