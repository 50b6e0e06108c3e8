"""
Provider Logging

Terraform captures a plugin's stderr and forwards it to its own log when
TF_LOG (or TF_LOG_PROVIDER) is set, so the provider logs there.

Usage:
    from bitwarden_provider.logs import setup_logging, mask_secret

    setup_logging()
    mask_secret(access_token)   # never printed from now on
"""

import logging
import os
import sys
from typing import Mapping, Optional, Set

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
MASK = "***"

# Terraform log levels -> logging levels
TF_LOG_LEVELS = {
    "TRACE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


class SecretMaskingFilter(logging.Filter):
    """Replaces registered secret strings in log records with a mask."""

    def __init__(self):
        super().__init__()
        self._secrets: Set[str] = set()

    def add(self, secret: str) -> None:
        if secret:
            self._secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        masked = message
        for secret in self._secrets:
            masked = masked.replace(secret, MASK)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


masking_filter = SecretMaskingFilter()


def mask_secret(secret: str) -> None:
    """Register a value that must never appear in log output."""
    masking_filter.add(secret)


def level_from_env(environ: Optional[Mapping] = None) -> int:
    """Map TF_LOG_PROVIDER / TF_LOG to a logging level (WARNING when unset)."""
    environ = os.environ if environ is None else environ
    value = environ.get("TF_LOG_PROVIDER") or environ.get("TF_LOG") or ""
    return TF_LOG_LEVELS.get(value.strip().upper(), logging.WARNING)


def setup_logging(level: Optional[int] = None) -> logging.Logger:
    """
    Configure the package logger to write to stderr.

    Args:
        level: Explicit level (default: derived from TF_LOG)

    Returns:
        The bitwarden_provider logger
    """
    logger = logging.getLogger("bitwarden_provider")
    logger.setLevel(level if level is not None else level_from_env())

    if not any(getattr(h, "_bitwarden_provider", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(masking_filter)
        handler._bitwarden_provider = True
        logger.addHandler(handler)

    return logger
