from abc import ABC, abstractmethod

from fine_appeal.inference.models import PromptSpec


class BaseInferenceClient(ABC):
    """Contract for provider-specific inference clients.

    This is the only boundary between the pipeline and the external AI
    service. Each method makes at most one provider call.
    """

    @abstractmethod
    def extract_structured(self, prompt: PromptSpec) -> str:
        """Return the provider's raw JSON text for a structured extraction.

        Raises:
            InferenceError: on transport failure or an empty response.
        """

    @abstractmethod
    def generate_text(self, prompt: PromptSpec) -> str:
        """Return free text generated for the prompt.

        Raises:
            InferenceError: on transport failure or an empty response.
        """
