"""
Anthropic Claude messages provider.
"""

from typing import Any, Dict, Optional, Tuple

from ..base import LLMProvider, LLMResponse
from brandvoice_xliff.config import (ANTHROPIC_VERSION, CLAUDE_API_ENDPOINT, CLAUDE_MODEL,
                                     MAX_TOKENS, TEMPERATURE)


class ClaudeProvider(LLMProvider):
    """Anthropic messages API provider"""

    name = "claude"

    def __init__(self, api_key: str, model: str = CLAUDE_MODEL,
                 api_endpoint: str = CLAUDE_API_ENDPOINT,
                 max_tokens: int = MAX_TOKENS, temperature: float = TEMPERATURE,
                 anthropic_version: str = ANTHROPIC_VERSION, **kwargs):
        super().__init__(model=model, api_key=api_key, api_endpoint=api_endpoint, **kwargs)
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.anthropic_version = anthropic_version

    def _build_request(self, prompt: str, system_prompt: Optional[str]) -> Tuple[Dict[str, str], Dict[str, Any]]:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.anthropic_version,
        }

        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        # The messages API takes the system prompt as a top-level field
        if system_prompt:
            payload["system"] = system_prompt
        return headers, payload

    def _parse_response(self, response_json: Dict[str, Any]) -> LLMResponse:
        # Content is a list of blocks; only text blocks carry the answer
        blocks = response_json["content"]
        content = "".join(block.get("text", "") for block in blocks if block.get("type") == "text")
        usage = response_json.get("usage", {})
        return LLMResponse(
            content=content,
            prompt_tokens=usage.get("input_tokens", 0),
            completion_tokens=usage.get("output_tokens", 0),
        )
