"""
Structured log events shared by the client and the CLI.

Functions:
    log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields):
        Logs an event as a single JSON record.

    redact(text: str, secret: str | None) -> str:
        Masks every occurrence of a secret in a string.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import json
import logging

REDACTED = "***"


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields):
    record = {"event": event, **fields}
    logger.log(level, json.dumps(record, ensure_ascii=False, default=str))


def redact(text: str, secret: str | None) -> str:
    if not secret:
        return text
    return text.replace(secret, REDACTED)
