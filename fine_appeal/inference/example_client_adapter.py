"""Example inference client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseInferenceClient and register the provider in
InferenceClientFactory.
"""

import json
from typing import ClassVar

from fine_appeal.inference.client_base import BaseInferenceClient
from fine_appeal.inference.models import PromptSpec


class ExampleClientAdapter(BaseInferenceClient):
    """Example adapter that returns fixed, valid responses.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_FINE: ClassVar[dict[str, str]] = {
        "referenceNumber": "EX-0001",
        "date": "2024-01-01",
        "amount": "50.00",
        "location": "Example Street",
        "reason": "Parking in a restricted zone",
        "vehicle": "EX 123 AB",
    }

    DEFAULT_APPEAL: ClassVar[str] = (
        "Dear Sir or Madam,\n"
        "\n"
        "I am writing to formally **appeal** fine reference EX-0001.\n"
        "\n"
        "_Yours faithfully,_\n"
        "[Your Name]"
    )

    def extract_structured(self, prompt: PromptSpec) -> str:
        _ = prompt
        return json.dumps(self.DEFAULT_FINE)

    def generate_text(self, prompt: PromptSpec) -> str:
        _ = prompt
        return self.DEFAULT_APPEAL
