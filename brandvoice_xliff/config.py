"""
Centralized configuration class
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

# Check for DEBUG_MODE early (before .env is loaded, check environment)
_debug_mode = os.getenv('DEBUG_MODE', 'false').lower() == 'true'
if _debug_mode:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("DEBUG_MODE enabled - verbose logging active")

# Get config directory (current working directory)
_config_dir = Path.cwd()
_env_file = _config_dir / '.env'

if _debug_mode:
    _config_logger.debug(f"Looking for .env at: {_env_file.absolute()} (exists: {_env_file.exists()})")

# Load .env file if it exists; running without one means defaults + process environment
_dotenv_result = load_dotenv(_env_file)
if _debug_mode:
    _config_logger.debug(f"load_dotenv() returned: {_dotenv_result}")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


# LLM Provider configuration
LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'claude')  # 'claude' or 'openai'
SUPPORTED_PROVIDERS = ('claude', 'openai')

OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
OPENAI_API_ENDPOINT = os.getenv('OPENAI_API_ENDPOINT', 'https://api.openai.com/v1/chat/completions')

CLAUDE_API_KEY = os.getenv('CLAUDE_API_KEY', '')
CLAUDE_MODEL = os.getenv('CLAUDE_MODEL', 'claude-3-5-sonnet-20241022')
CLAUDE_API_ENDPOINT = os.getenv('CLAUDE_API_ENDPOINT', 'https://api.anthropic.com/v1/messages')
ANTHROPIC_VERSION = os.getenv('ANTHROPIC_VERSION', '2023-06-01')

MAX_TOKENS = int(os.getenv('MAX_TOKENS', '2000'))
TEMPERATURE = float(os.getenv('TEMPERATURE', '0.7'))

# Request behaviour
REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '30'))
RATE_LIMIT_RPM = int(os.getenv('RATE_LIMIT_RPM', '3'))
MAX_TRANSLATION_ATTEMPTS = int(os.getenv('MAX_TRANSLATION_ATTEMPTS', '2'))
RETRY_DELAY_SECONDS = int(os.getenv('RETRY_DELAY_SECONDS', '2'))

# XLIFF output
TARGET_STATE = os.getenv('TARGET_STATE', 'translated')
REMOVE_STATE_QUALIFIER = _env_flag('REMOVE_STATE_QUALIFIER', 'true')
DEFAULT_SOURCE_LANGUAGE = os.getenv('DEFAULT_SOURCE_LANGUAGE', 'es')
DEFAULT_TARGET_LANGUAGE = os.getenv('DEFAULT_TARGET_LANGUAGE', 'en')

# Translation cache
CACHE_ENABLED = _env_flag('CACHE_ENABLED', 'true')
CACHE_DIR = os.getenv('CACHE_DIR', 'cache')

# Optional JSON overrides for the built-in glossary and classification tables
GLOSSARY_FILE = os.getenv('GLOSSARY_FILE', '')
RULES_FILE = os.getenv('RULES_FILE', '')

# Batch processing
OUTPUT_DIR = os.getenv('OUTPUT_DIR', 'translated')
OUTPUT_FILENAME_PATTERN = os.getenv('OUTPUT_FILENAME_PATTERN', '{filename}_{language}.xliff')
SKIP_EXISTING_FILES = _env_flag('SKIP_EXISTING_FILES', 'true')
BATCH_DB_PATH = os.getenv('BATCH_DB_PATH', 'data/batch_progress.db')

# Logging
LOG_DIR = os.getenv('LOG_DIR', 'logs')

# Debug mode (reload after .env is loaded)
DEBUG_MODE = _env_flag('DEBUG_MODE', 'false')


def _mask(secret: str) -> str:
    return '***' + secret[-4:] if secret else '(not set)'


# Log loaded configuration in debug mode
if DEBUG_MODE or _debug_mode:
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("=" * 60)
    _config_logger.debug("LOADED CONFIGURATION VALUES:")
    _config_logger.debug(f"   LLM_PROVIDER: {LLM_PROVIDER}")
    _config_logger.debug(f"   OPENAI_MODEL: {OPENAI_MODEL}")
    _config_logger.debug(f"   CLAUDE_MODEL: {CLAUDE_MODEL}")
    _config_logger.debug(f"   REQUEST_TIMEOUT: {REQUEST_TIMEOUT}")
    _config_logger.debug(f"   RATE_LIMIT_RPM: {RATE_LIMIT_RPM}")
    _config_logger.debug(f"   OPENAI_API_KEY: {_mask(OPENAI_API_KEY)}")
    _config_logger.debug(f"   CLAUDE_API_KEY: {_mask(CLAUDE_API_KEY)}")
    _config_logger.debug(f"   CACHE_DIR: {CACHE_DIR} (enabled: {CACHE_ENABLED})")
    _config_logger.debug("=" * 60)

# Translation tags wrapping the provider output
TRANSLATE_TAG_IN = "<TRANSLATION>"
TRANSLATE_TAG_OUT = "</TRANSLATION>"
INPUT_TAG_IN = "<SOURCE_TEXT>"
INPUT_TAG_OUT = "</SOURCE_TEXT>"

# Language code -> prompt language name
LANGUAGE_NAMES = {
    'es': 'Spanish',
    'en': 'English',
    'de': 'German',
    'fr': 'French',
    'it': 'Italian',
}


@dataclass
class TranslationConfig:
    """Unified configuration for single-file and batch runs"""

    # LLM Provider settings
    llm_provider: str = LLM_PROVIDER
    openai_api_key: str = OPENAI_API_KEY
    claude_api_key: str = CLAUDE_API_KEY
    model: Optional[str] = None  # None = provider default

    # Languages
    target_language: Optional[str] = None  # None = use the file's target-language

    # LLM parameters
    timeout: int = REQUEST_TIMEOUT
    max_attempts: int = MAX_TRANSLATION_ATTEMPTS
    retry_delay: int = RETRY_DELAY_SECONDS
    requests_per_minute: int = RATE_LIMIT_RPM
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE

    # XLIFF output
    target_state: str = TARGET_STATE
    remove_state_qualifier: bool = REMOVE_STATE_QUALIFIER

    # Data files
    glossary_file: str = GLOSSARY_FILE
    rules_file: str = RULES_FILE
    cache_enabled: bool = CACHE_ENABLED
    cache_dir: str = CACHE_DIR

    # Batch
    output_filename_pattern: str = OUTPUT_FILENAME_PATTERN
    skip_existing_files: bool = SKIP_EXISTING_FILES
    batch_db_path: str = BATCH_DB_PATH

    # Interface-specific
    enable_colors: bool = True

    @classmethod
    def from_cli_args(cls, args) -> 'TranslationConfig':
        """Create config from CLI arguments"""
        return cls(
            llm_provider=getattr(args, 'provider', None) or LLM_PROVIDER,
            model=getattr(args, 'model', None),
            target_language=getattr(args, 'target_lang', None),
            cache_enabled=CACHE_ENABLED and not getattr(args, 'no_cache', False),
            glossary_file=getattr(args, 'glossary', None) or GLOSSARY_FILE,
            rules_file=getattr(args, 'rules', None) or RULES_FILE,
            enable_colors=not getattr(args, 'no_color', False),
        )

    def api_key_for(self, provider: Optional[str] = None) -> str:
        """Return the API key configured for a provider (defaults to the active one)"""
        provider = (provider or self.llm_provider).lower()
        if provider == 'openai':
            return self.openai_api_key
        if provider == 'claude':
            return self.claude_api_key
        return ''

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (API keys masked)"""
        return {
            'llm_provider': self.llm_provider,
            'model': self.model,
            'target_language': self.target_language,
            'timeout': self.timeout,
            'max_attempts': self.max_attempts,
            'retry_delay': self.retry_delay,
            'requests_per_minute': self.requests_per_minute,
            'max_tokens': self.max_tokens,
            'temperature': self.temperature,
            'target_state': self.target_state,
            'remove_state_qualifier': self.remove_state_qualifier,
            'glossary_file': self.glossary_file,
            'rules_file': self.rules_file,
            'cache_enabled': self.cache_enabled,
            'cache_dir': self.cache_dir,
            'output_filename_pattern': self.output_filename_pattern,
            'skip_existing_files': self.skip_existing_files,
            'batch_db_path': self.batch_db_path,
            'openai_api_key': _mask(self.openai_api_key),
            'claude_api_key': _mask(self.claude_api_key),
        }
