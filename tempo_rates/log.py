"""Logging setup with secret redaction."""

from __future__ import annotations

import logging
from collections.abc import Iterable

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_FORMATTER = logging.Formatter(_FORMAT)


class RedactingFilter(logging.Filter):
    """Logging filter that masks configured secrets in every record."""

    def __init__(self, secrets: Iterable[str]) -> None:
        """Initialize with the values to hide. Empty values are ignored."""
        super().__init__()
        self._secrets = sorted({s for s in secrets if s}, key=len, reverse=True)

    @staticmethod
    def obfuscate(value: str, show_chars: int = 2) -> str:
        """Obfuscate a string showing only its first and last characters."""
        if len(value) <= show_chars * 2:
            return "*" * len(value)
        return f"{value[:show_chars]}{'*' * (len(value) - show_chars * 2)}{value[-show_chars:]}"

    def redact(self, text: str) -> str:
        """Return text with every secret obfuscated."""
        for secret in self._secrets:
            text = text.replace(secret, self.obfuscate(secret))
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        """Render message, traceback and stack once, redacted."""
        if not self._secrets:
            return True
        record.msg = self.redact(record.getMessage())
        record.args = None
        if record.exc_info and not record.exc_text:
            record.exc_text = _FORMATTER.formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)
        if record.stack_info:
            record.stack_info = self.redact(record.stack_info)
        return True


def setup_logging(level: str, secrets: Iterable[str] = ()) -> None:
    """Configure the root logger for the service."""
    handler = logging.StreamHandler()
    handler.setFormatter(_FORMATTER)
    handler.addFilter(RedactingFilter(secrets))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
