"""Entry point for running ClassicXO via ``python -m classicxo``."""

from __future__ import annotations

import logging
import os

import uvicorn


def _logging_level(log_level: str) -> int:
    # uvicorn's "trace" sits below DEBUG and has no stdlib counterpart
    if log_level == "trace":
        return logging.DEBUG
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {log_level!r}")
    return level


def main() -> None:
    """Start the FastAPI-powered ClassicXO web server."""

    host = os.environ.get("CLASSICXO_HOST", "0.0.0.0")
    port = int(os.environ.get("CLASSICXO_PORT", "8000"))
    log_level = os.environ.get("CLASSICXO_LOG_LEVEL", "info").lower()
    logging.basicConfig(level=_logging_level(log_level))
    uvicorn.run("classicxo.ui:app", host=host, port=port, reload=False, log_level=log_level)


if __name__ == "__main__":
    main()
