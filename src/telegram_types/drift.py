from __future__ import annotations

import re
import threading
from collections import Counter
from typing import Dict, Iterable, List, Tuple

from telegram_types.core.logger import get_logger
from telegram_types.decoding.decoder import Decoded

logger = get_logger(__name__)

_INDEX = re.compile(r"\[\d+\]")


def normalize_path(path: str) -> str:
    """Drop list indices so ``result[3].from.foo`` and ``result[0].from.foo`` count together."""
    return _INDEX.sub("[]", path)


class DriftObserver:
    """Observer interface for decode results that carry unknown fields."""

    def handle(self, decoded: Decoded) -> None:  # pragma: no cover
        raise NotImplementedError


class LoggingDriftObserver(DriftObserver):
    """Log one warning per decode that met undeclared fields."""

    def handle(self, decoded: Decoded) -> None:
        if not decoded.has_drift:
            return
        logger.warning(
            f"Schema drift in {decoded.target}: {len(decoded.unknown_fields)} unknown field(s) "
            f"{list(decoded.unknown_fields)}"
        )


class DriftCollector(DriftObserver):
    """
    Count unknown fields across many decodes.

    Keys are ``(target, path)`` with list indices removed. Safe to feed from
    several threads at once.
    """

    def __init__(self) -> None:
        self._counts: Counter = Counter()
        self._documents = 0
        self._lock = threading.Lock()

    def handle(self, decoded: Decoded) -> None:
        keys = [(decoded.target, normalize_path(path)) for path in decoded.unknown_fields]
        with self._lock:
            self._documents += 1
            self._counts.update(keys)

    @property
    def documents(self) -> int:
        with self._lock:
            return self._documents

    def counts(self) -> Dict[Tuple[str, str], int]:
        with self._lock:
            return dict(self._counts)

    def report(self) -> List[Tuple[str, str, int]]:
        """Rows of ``(target, path, count)``, most frequent first, then by target and path."""
        rows = [(target, path, n) for (target, path), n in self.counts().items()]
        return sorted(rows, key=lambda row: (-row[2], row[0], row[1]))

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
            self._documents = 0


def notify(observers: Iterable[DriftObserver], decoded: Decoded) -> Decoded:
    """Hand ``decoded`` to each observer and return it unchanged."""
    for observer in observers:
        observer.handle(decoded)
    return decoded
