"""
Plain text formatter for diagnostic logging
"""

import logging
from datetime import datetime
from typing import Optional

from ..config import LoggerConfig, get_default_config


class PlainTextFormatter(logging.Formatter):
    """Single-line human readable diagnostics"""

    def __init__(self, config: Optional[LoggerConfig] = None):
        super().__init__()
        self.config = config or get_default_config()

    def format(self, record: logging.LogRecord) -> str:
        parts = []

        if self.config.include_timestamp:
            parts.append(f"[{datetime.now().isoformat()}Z]")

        parts.extend([record.levelname, record.name, record.getMessage()])

        context_items = []
        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                value_str = str(value)
                # Truncate very long values for readability
                if len(value_str) > 100:
                    value_str = value_str[:97] + "..."
                context_items.append(f"{key[4:]}={value_str}")

        if context_items:
            parts.append(f"({', '.join(context_items)})")

        text = " ".join(parts)
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text
