from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the package logger (Streamlit reruns call this repeatedly)."""
    global _configured
    logger = logging.getLogger("coachdesk")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
