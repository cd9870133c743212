from dataclasses import dataclass, field

from fine_appeal.extraction.models import ImageContent


@dataclass(frozen=True)
class PromptSpec:
    """Everything the inference service needs for one call."""

    user_prompt: str
    system_prompt: str = ""
    image: ImageContent | None = None
    json_schema: dict[str, object] | None = field(default=None, compare=False)
