"""
Unified logging system for the XLIFF brand-voice translator
Provides consistent console output for the CLI scripts plus an optional session log file
"""
import sys
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, Callable, TextIO
from enum import Enum


class LogLevel(Enum):
    """Log levels with priority values"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(Enum):
    """Types of log messages for special handling"""
    GENERAL = "general"
    FILE_START = "file_start"
    FILE_END = "file_end"
    PARSE_SUMMARY = "parse_summary"
    UNIT_TRANSLATED = "unit_translated"
    DUPLICATE_APPLIED = "duplicate_applied"
    FALLBACK = "fallback"
    GLOSSARY_CORRECTION = "glossary_correction"
    LLM_REQUEST = "llm_request"
    LLM_RESPONSE = "llm_response"
    BATCH_PROGRESS = "batch_progress"
    SUMMARY = "summary"
    ERROR_DETAIL = "error_detail"


class Colors:
    """ANSI color codes for terminal output"""
    # Check if colors should be disabled
    NO_COLOR = os.environ.get('NO_COLOR') is not None or not sys.stdout.isatty()

    YELLOW = '' if NO_COLOR else '\033[93m'       # headers
    WHITE = '' if NO_COLOR else '\033[97m'        # main text
    GRAY = '' if NO_COLOR else '\033[90m'         # technical info
    ORANGE = '' if NO_COLOR else '\033[38;5;214m' # input sent to the provider
    GREEN = '' if NO_COLOR else '\033[92m'        # provider output
    RED = '' if NO_COLOR else '\033[91m'          # errors
    ENDC = '' if NO_COLOR else '\033[0m'          # reset

    @classmethod
    def disable(cls):
        """Disable all colors"""
        cls.YELLOW = cls.WHITE = cls.GRAY = cls.ORANGE = cls.GREEN = cls.RED = cls.ENDC = ''


class UnifiedLogger:
    """
    Unified logger that provides consistent logging across the CLI scripts
    """

    def __init__(self,
                 name: str = "BrandVoiceXliff",
                 console_output: bool = True,
                 enable_colors: bool = True,
                 min_level: LogLevel = LogLevel.INFO,
                 log_file: Optional[str] = None,
                 storage_callback: Optional[Callable] = None):
        """
        Initialize the unified logger

        Args:
            name: Logger name/identifier
            console_output: Whether to output to console
            enable_colors: Whether to use colored output
            min_level: Minimum log level to display
            log_file: Optional path of a plain-text session log
            storage_callback: Callback for storing logs (e.g., in memory for tests)
        """
        self.name = name
        self.console_output = console_output
        self.enable_colors = enable_colors
        self.min_level = min_level
        self.storage_callback = storage_callback
        self.log_file: Optional[str] = None
        self._log_handle: Optional[TextIO] = None

        if log_file:
            self.open_log_file(log_file)

        if not enable_colors:
            Colors.disable()

    def open_log_file(self, path: str):
        """Start mirroring every entry to a plain-text log file"""
        self.close_log_file()
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._log_handle = open(path, 'a', encoding='utf-8')
        self.log_file = path

    def close_log_file(self):
        if self._log_handle is not None:
            self._log_handle.close()
            self._log_handle = None

    def _format_timestamp(self) -> str:
        """Format current timestamp"""
        return datetime.now().strftime("%H:%M:%S")

    def _format_console_message(self, level: LogLevel, message: str,
                               log_type: LogType = LogType.GENERAL,
                               data: Optional[Dict[str, Any]] = None) -> str:
        """Format message for console output"""
        timestamp = self._format_timestamp()

        level_colors = {
            LogLevel.DEBUG: Colors.GRAY,
            LogLevel.INFO: Colors.WHITE,
            LogLevel.WARNING: Colors.YELLOW,
            LogLevel.ERROR: Colors.RED,
            LogLevel.CRITICAL: Colors.RED
        }

        color = level_colors.get(level, Colors.WHITE)

        # Special formatting for different log types
        if log_type == LogType.LLM_REQUEST:
            return self._format_llm_request(data or {})
        elif log_type == LogType.LLM_RESPONSE:
            return self._format_llm_response(data or {})
        elif log_type == LogType.FILE_START:
            return self._format_file_start(message, data or {})
        elif log_type in (LogType.SUMMARY, LogType.PARSE_SUMMARY):
            return f"{Colors.WHITE}{message}{Colors.ENDC}"
        elif log_type == LogType.BATCH_PROGRESS:
            return self._format_batch_progress(message, data or {})
        elif log_type == LogType.ERROR_DETAIL:
            return self._format_error_detail(message, data or {})
        else:
            level_str = f"[{level.name}]" if level != LogLevel.INFO else ""
            return f"{color}[{timestamp}] {level_str} {message}{Colors.ENDC}"

    def _format_llm_request(self, data: Dict[str, Any]) -> str:
        """Format provider request with full details"""
        output = []
        output.append(f"{Colors.YELLOW}{'=' * 80}{Colors.ENDC}")
        output.append(f"{Colors.YELLOW}[{self._format_timestamp()}] SENDING TO {data.get('provider', 'LLM').upper()}{Colors.ENDC}")
        if 'model' in data:
            output.append(f"{Colors.GRAY}Model: {data['model']}{Colors.ENDC}")
        if data.get('system_prompt'):
            output.append(f"{Colors.GRAY}[SYSTEM]{Colors.ENDC}")
            output.append(f"{Colors.ORANGE}{data['system_prompt']}{Colors.ENDC}")
        if data.get('user_prompt'):
            output.append(f"{Colors.GRAY}[USER]{Colors.ENDC}")
            output.append(f"{Colors.ORANGE}{data['user_prompt']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_llm_response(self, data: Dict[str, Any]) -> str:
        """Format provider response"""
        output = [f"{Colors.GREEN}[{self._format_timestamp()}] LLM RESPONSE (OUTPUT){Colors.ENDC}"]
        if 'execution_time' in data:
            output.append(f"{Colors.GRAY}Execution time: {data['execution_time']:.2f} seconds{Colors.ENDC}")
        if self.min_level == LogLevel.DEBUG:
            output.append(f"{Colors.GREEN}{data.get('response', '')}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_file_start(self, message: str, data: Dict[str, Any]) -> str:
        output = [f"{Colors.YELLOW}{message}{Colors.ENDC}"]
        if 'output' in data:
            output.append(f"{Colors.GRAY}Output: {data['output']}{Colors.ENDC}")
        if 'total_units' in data:
            output.append(f"{Colors.WHITE}Units: {data['total_units']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_batch_progress(self, message: str, data: Dict[str, Any]) -> str:
        current = data.get('current', 0)
        total = data.get('total', 0)
        percentage = (current / total * 100) if total > 0 else 0
        return f"{Colors.WHITE}[{current}/{total}] ({percentage:.1f}%) {message}{Colors.ENDC}"

    def _format_error_detail(self, message: str, data: Dict[str, Any]) -> str:
        """Format detailed error message"""
        output = [f"{Colors.RED}[{self._format_timestamp()}] ERROR: {message}{Colors.ENDC}"]
        if 'details' in data:
            output.append(f"{Colors.RED}Details: {data['details']}{Colors.ENDC}")
        if 'unit_id' in data:
            output.append(f"{Colors.RED}Unit: {data['unit_id']}{Colors.ENDC}")
        return '\n'.join(output)

    def _write_log_file(self, level: LogLevel, message: str, log_type: LogType):
        if self._log_handle is None:
            return
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        self._log_handle.write(f"[{stamp}] [{level.name}] [{log_type.value}] {message}\n")
        self._log_handle.flush()

    def log(self, level: LogLevel, message: str,
            log_type: LogType = LogType.GENERAL,
            data: Optional[Dict[str, Any]] = None):
        """
        Main logging method

        Args:
            level: Log level
            message: Log message
            log_type: Type of log for special formatting
            data: Additional data for the log entry
        """
        # The file keeps every entry, the console honours the minimum level
        self._write_log_file(level, message, log_type)

        if level.value < self.min_level.value:
            return

        if self.console_output:
            try:
                console_msg = self._format_console_message(level, message, log_type, data)
                if console_msg:
                    print(console_msg, flush=True)
            except UnicodeEncodeError:
                # Windows consoles (cp1252) cannot print every character
                safe_message = message.encode('ascii', 'replace').decode('ascii')
                print(f"[{self._format_timestamp()}] {safe_message}", flush=True)

        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'level': level.name,
            'type': log_type.value,
            'message': message,
            'data': data or {}
        }

        if self.storage_callback:
            self.storage_callback(log_entry)

    # Convenience methods
    def debug(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.DEBUG, message, log_type, data)

    def info(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.INFO, message, log_type, data)

    def warning(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.WARNING, message, log_type, data)

    def error(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.ERROR, message, log_type, data)

    def critical(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.CRITICAL, message, log_type, data)


# Global logger instance
_global_logger = None


def get_logger(name: str = "BrandVoiceXliff", **kwargs) -> UnifiedLogger:
    """
    Get or create the global logger instance

    Args:
        name: Logger name
        **kwargs: Additional arguments for UnifiedLogger

    Returns:
        UnifiedLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = UnifiedLogger(name, **kwargs)
    elif 'storage_callback' in kwargs:
        _global_logger.storage_callback = kwargs['storage_callback']
    return _global_logger


def session_log_path(log_dir: str, label: str = "session") -> str:
    """Build the per-run log path: <log_dir>/xliff-translation-<timestamp>_<label>.log"""
    stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    safe_label = "".join(c if c.isalnum() or c in "-_." else "_" for c in label)
    return str(Path(log_dir) / f"xliff-translation-{stamp}_{safe_label}.log")


def setup_cli_logger(enable_colors: bool = True, log_file: Optional[str] = None) -> UnifiedLogger:
    """Setup logger for CLI usage"""
    # Import here to avoid circular dependencies
    from brandvoice_xliff.config import DEBUG_MODE

    min_level = LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO
    logger = get_logger(
        console_output=True,
        enable_colors=enable_colors,
        min_level=min_level
    )
    # The global logger may already exist (components create it on first use)
    logger.console_output = True
    logger.enable_colors = enable_colors
    logger.min_level = min_level
    if not enable_colors:
        Colors.disable()
    if log_file:
        logger.open_log_file(log_file)
    return logger
