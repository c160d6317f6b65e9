from typing import List, NamedTuple, Optional

from brandvoice_xliff.config import (INPUT_TAG_IN, INPUT_TAG_OUT, LANGUAGE_NAMES,
                                     TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT)


class PromptPair(NamedTuple):
    """A pair of system and user prompts for LLM translation."""
    system: str
    user: str


# ============================================================================
# SHARED PROMPT SECTIONS
# ============================================================================

def _get_output_format_section(
    translate_tag_in: str,
    translate_tag_out: str,
    input_tag_in: str,
    input_tag_out: str,
    additional_rules: str = "",
) -> str:
    """
    Generate standardized output format instructions.

    Args:
        translate_tag_in: Opening tag for translation output
        translate_tag_out: Closing tag for translation output
        input_tag_in: Opening tag for input text
        input_tag_out: Closing tag for input text
        additional_rules: Optional additional formatting rules

    Returns:
        str: Formatted output format instructions
    """
    additional_rules_text = f"\n{additional_rules}" if additional_rules else ""

    return f"""# OUTPUT FORMAT

1. Translate ONLY the text between "{input_tag_in}" and "{input_tag_out}"
2. Your response MUST start with {translate_tag_in} and end with {translate_tag_out}
3. Include NOTHING before {translate_tag_in} and NOTHING after {translate_tag_out}
4. Do NOT add explanations, alternatives, notes or greetings{additional_rules_text}

**CORRECT format (ONLY this):**
{translate_tag_in}
Your translated text here
{translate_tag_out}
"""


def _get_protected_terms_section(protected_terms: Optional[List[str]]) -> str:
    if not protected_terms:
        return ""
    terms = "\n".join(f"- {term}" for term in protected_terms)
    return f"""
# PROTECTED TERMS (copy exactly, never translate or change casing)
{terms}
"""


# ============================================================================
# SYSTEM PROMPT
# ============================================================================

BRAND_VOICE_SYSTEM_PROMPT = """You are a specialized translator for Nests Hostels, a surf hostel chain in the Canary Islands for Gen-Z and Millennial travelers (18-35).

# BRAND VOICE
Write like the cool local friend in the group chat: enthusiastic and authentic, never corporate or salesy.
- Conversational, casual tone with natural contractions
- Address the reader directly as "you"
- Short, scannable sentences
- Genuine recommendations, never sales pitches
- No formal business language, passive voice or corporate jargon

# TECHNICAL RULES
- Preserve ALL HTML tags and comments exactly: <strong>, <br/>, <!-- wp:paragraph -->
- Keep WordPress shortcodes unchanged: [shortcode_name]
- Keep emojis and special characters
- Never translate proper nouns: Duque Nest, Costa Adeje, Tenerife, NEST PASS, Nests Hostels
- URLs, e-mail addresses and phone numbers stay unchanged

# QUALITY CHECK
Apply the "group chat test": if you would not send it to your travel friends because it sounds corporate, rewrite it.
"""


# ============================================================================
# LANGUAGE-SPECIFIC GUIDELINES
# ============================================================================

BRAND_VOICE_LANGUAGE_RULES = {
    'spanish': """- Use "tú" (never "usted")
- Casual expressions where they fit: "¡Qué guay!", "¡Brutal!"
- Gender-inclusive wording when possible""",
    'english': """- Casual international English
- Beach/surf vocabulary: "vibes", "chill", "awesome"
- Plain words over corporate ones: "use" not "utilize\"""",
    'german': """- Use "du" (never "Sie")
- Casual interjections: "Krass!", "Cool!"
- Keep sentences short, German gets wordy
- Loanwords young Germans use: "chillen", "checken\"""",
    'french': """- Use "tu" (never "vous")
- Casual expressions: "Trop bien !", "Génial !"
- Natural contractions: "j'ai", "c'est", "t'es\"""",
    'italian': """- Use "tu" (never "Lei")
- Expressive terms: "Che figo!", "Assurdo!"
- Keep the musical flow of Italian""",
}

METADATA_LANGUAGE_RULES = {
    'spanish': """- Keep keyword density and search intent
- Use "tú" but stay professional in meta descriptions
- Include travel keywords naturally""",
    'english': """- Keep keyword density and search intent
- Use travel industry standard terminology
- Keep meta descriptions under 160 characters""",
    'german': """- Keep keyword density for German search
- Use compound words strategically
- Keep meta descriptions concise""",
    'french': """- Keep keyword density for French search
- Use travel terminology common in French search
- Include location keywords naturally""",
    'italian': """- Keep keyword density for Italian search
- Use travel terminology for the Italian market
- Include tourism keywords naturally""",
}


def get_language_key(language_code: str) -> str:
    """Map a language code (es, en, de, fr, it) to its prompt key, English for unknown codes"""
    name = LANGUAGE_NAMES.get((language_code or "").lower()[:2], "English")
    return name.lower()


# ============================================================================
# PROMPT BUILDERS
# ============================================================================

def generate_brand_voice_prompt(
    text: str,
    target_language: str,
    context: str = "",
    protected_terms: Optional[List[str]] = None,
) -> PromptPair:
    """
    Build the prompt pair for website copy.

    Args:
        text: Source text (may contain HTML)
        target_language: Target language code
        context: WPML purpose/content hint
        protected_terms: Glossary terms present in the text

    Returns:
        PromptPair
    """
    language_key = get_language_key(target_language)
    language_name = language_key.capitalize()

    user_prompt = f"""Translate the following text to {language_name}.

# LANGUAGE-SPECIFIC RULES FOR {language_name.upper()}
{BRAND_VOICE_LANGUAGE_RULES[language_key]}

# CONTEXT
{context or 'General content'}
{_get_protected_terms_section(protected_terms)}
{INPUT_TAG_IN}
{text}
{INPUT_TAG_OUT}

{_get_output_format_section(TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT, INPUT_TAG_IN, INPUT_TAG_OUT)}"""

    return PromptPair(system=BRAND_VOICE_SYSTEM_PROMPT, user=user_prompt)


def generate_metadata_prompt(
    text: str,
    target_language: str,
    seo_type: str = "general",
    protected_terms: Optional[List[str]] = None,
) -> PromptPair:
    """
    Build the prompt pair for SEO fields (titles, meta descriptions, keywords, alt texts).

    Args:
        text: Source text
        target_language: Target language code
        seo_type: WPML content type of the field (e.g. "Meta Description")
        protected_terms: Glossary terms present in the text

    Returns:
        PromptPair
    """
    language_key = get_language_key(target_language)
    language_name = language_key.capitalize()

    output_format = _get_output_format_section(
        TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT, INPUT_TAG_IN, INPUT_TAG_OUT,
        additional_rules="5. Keep the length close to the original (search snippets are truncated)",
    )

    user_prompt = f"""Translate the following SEO content to {language_name} with focus on keywords and search optimization.

# SEO-SPECIFIC RULES FOR {language_name.upper()}
{METADATA_LANGUAGE_RULES[language_key]}

# SEO TYPE
{seo_type or 'general'}
{_get_protected_terms_section(protected_terms)}
{INPUT_TAG_IN}
{text}
{INPUT_TAG_OUT}

{output_format}"""

    return PromptPair(system=BRAND_VOICE_SYSTEM_PROMPT, user=user_prompt)
