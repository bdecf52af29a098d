import logging
import sys
import contextvars
from typing import Optional

# Context variable to carry the current document id across the call chain
_DOC_ID: contextvars.ContextVar[str] = contextvars.ContextVar("doc_id", default="-")


class _DocumentFilter(logging.Filter):
    """Logging filter that injects the document id from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.doc_id = _DOC_ID.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | doc=%(doc_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_root_logger(level: str = "INFO") -> None:
    """
    Configure the root logger and the telegram_types logger.

    Root logger stays at INFO to keep third-party noise down; only the
    telegram_types namespace follows the requested level.

    Safe to call multiple times; it will not duplicate handlers.
    """
    root = logging.getLogger()
    package_logger = logging.getLogger("telegram_types")

    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _DocumentFilter) for f in h.filters):
            package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_DocumentFilter())
    root.addHandler(handler)
    root.setLevel(logging.INFO)

    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str = "telegram_types") -> logging.Logger:
    """
    Get a module logger.

    Library modules only ask for a logger; handlers are installed by the
    application (or the CLI) through ``configure_root_logger``.
    """
    return logging.getLogger(name)


def push_doc_id(doc_id: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current document id in context and return a token for later reset."""
    if not doc_id:
        return None
    return _DOC_ID.set(doc_id)


def reset_doc_id(token: Optional[contextvars.Token]) -> None:
    """Reset the document id context using the provided token (if any)."""
    if token is None:
        return
    _DOC_ID.reset(token)
