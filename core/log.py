import logging

from core.config import LOG_LEVEL, is_development


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for scripts and the HTTP app.

    Development runs log at DEBUG so location traces are visible; every other
    environment uses LOG_LEVEL. Warnings and errors are always emitted.
    """
    if level is None:
        level = "DEBUG" if is_development() else LOG_LEVEL

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Keep the HTTP client quiet unless something goes wrong
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
