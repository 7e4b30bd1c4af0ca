"""로깅 설정 유틸리티.

Logging configuration utilities for the query core.
HTTP traffic is shipped to Axiom by the middleware; this module only
configures the stdlib loggers the repositories and the pagination helper
write to (query kinds, count-skip decisions).

Usage:
    from member_search.utils.logging import configure_logging

    configure_logging(level="DEBUG", json_logs=False)
"""

import json
import logging
import logging.config
from typing import Any


class JsonFormatter(logging.Formatter):
    """한 줄 JSON 포매터: Minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """루트 로거를 설정합니다.

    Configure the root logger.

    Args:
        level: 로그 레벨 이름 (Level name, e.g. "DEBUG", "INFO")
        json_logs: JSON 형식 출력 여부 (Emit JSON instead of console lines)
    """
    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": level,
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )
