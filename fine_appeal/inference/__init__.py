from fine_appeal.inference.client_base import BaseInferenceClient
from fine_appeal.inference.factory import InferenceClientFactory
from fine_appeal.inference.models import PromptSpec

__all__ = ["BaseInferenceClient", "InferenceClientFactory", "PromptSpec"]
