import base64
from typing import Any

import httpx
import openai

from fine_appeal.exceptions import InferenceError
from fine_appeal.inference.client_base import BaseInferenceClient
from fine_appeal.inference.models import PromptSpec


class OpenAIClientAdapter(BaseInferenceClient):
    """Inference client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        temperature: float = 0.2,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )
        self._model = model
        self._temperature = temperature

    def extract_structured(self, prompt: PromptSpec) -> str:
        if prompt.json_schema is not None:
            response_format: dict[str, Any] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "fine_record",
                    "strict": True,
                    "schema": prompt.json_schema,
                },
            }
        else:
            response_format = {"type": "json_object"}
        return self._complete(prompt, temperature=0.0, response_format=response_format)

    def generate_text(self, prompt: PromptSpec) -> str:
        return self._complete(prompt, temperature=self._temperature)

    def _complete(
        self,
        prompt: PromptSpec,
        *,
        temperature: float,
        response_format: dict[str, Any] | None = None,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "temperature": temperature,
            "messages": self._build_messages(prompt),
        }
        if response_format is not None:
            kwargs["response_format"] = response_format

        try:
            response = self._client.chat.completions.create(**kwargs)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InferenceError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise InferenceError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise InferenceError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None or not content.strip():
            raise InferenceError("AI returned empty response")
        return content

    @staticmethod
    def _build_messages(prompt: PromptSpec) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []
        if prompt.system_prompt:
            messages.append({"role": "system", "content": prompt.system_prompt})
        if prompt.image is None:
            messages.append({"role": "user", "content": prompt.user_prompt})
            return messages
        encoded = base64.b64encode(prompt.image.data).decode("ascii")
        messages.append({
            "role": "user",
            "content": [
                {"type": "text", "text": prompt.user_prompt},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{prompt.image.mime_type};base64,{encoded}"},
                },
            ],
        })
        return messages
