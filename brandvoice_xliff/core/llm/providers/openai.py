"""
OpenAI chat completions provider.
"""

from typing import Any, Dict, Optional, Tuple

from ..base import LLMProvider, LLMResponse
from brandvoice_xliff.config import MAX_TOKENS, OPENAI_API_ENDPOINT, OPENAI_MODEL, TEMPERATURE


class OpenAIProvider(LLMProvider):
    """OpenAI API provider (also works with compatible /v1/chat/completions endpoints)"""

    name = "openai"

    def __init__(self, api_key: str, model: str = OPENAI_MODEL,
                 api_endpoint: str = OPENAI_API_ENDPOINT,
                 max_tokens: int = MAX_TOKENS, temperature: float = TEMPERATURE, **kwargs):
        super().__init__(model=model, api_key=api_key, api_endpoint=api_endpoint, **kwargs)
        self.max_tokens = max_tokens
        self.temperature = temperature

    def _build_request(self, prompt: str, system_prompt: Optional[str]) -> Tuple[Dict[str, str], Dict[str, Any]]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        return headers, payload

    def _parse_response(self, response_json: Dict[str, Any]) -> LLMResponse:
        content = response_json["choices"][0]["message"]["content"] or ""
        usage = response_json.get("usage", {})
        return LLMResponse(
            content=content,
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
        )
