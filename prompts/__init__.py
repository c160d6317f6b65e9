"""
Prompts module for the XLIFF brand-voice translator
"""
from prompts.prompts import (
    PromptPair,
    generate_brand_voice_prompt,
    generate_metadata_prompt,
)

__all__ = [
    "PromptPair",
    "generate_brand_voice_prompt",
    "generate_metadata_prompt",
]
