"""Entrypoint: python -m chat_hub"""
from __future__ import annotations

import uvicorn

from chat_hub.config import settings
from chat_hub.logging_config import configure_logging


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "chat_hub.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_config=None,
    )


if __name__ == "__main__":
    main()
