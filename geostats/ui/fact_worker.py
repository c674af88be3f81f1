"""Runs fun-fact fetches on the Qt thread pool."""

from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from geostats.core.facts import FactService
from geostats.core.session import FactRequest

logger = logging.getLogger(__name__)


class _FactSignals(QObject):
    finished = Signal(object, str)


class _FactTask(QRunnable):
    def __init__(self, service: FactService, request: FactRequest, signals: _FactSignals) -> None:
        super().__init__()
        self._service = service
        self._request = request
        self._signals = signals

    def run(self) -> None:
        text = self._service.fetch_fact(self._request.country, self._request.language)
        self._signals.finished.emit(self._request, text)


class FactDispatcher(QObject):
    """Launches fetches in the background and delivers results on the UI thread."""

    def __init__(self, service: FactService, on_result: Callable[[FactRequest, str], None], parent=None) -> None:
        super().__init__(parent)
        self._service = service
        self._on_result = on_result
        self._pool = QThreadPool.globalInstance()
        self._signals = _FactSignals()
        self._signals.finished.connect(self._deliver)

    def launch(self, request: FactRequest) -> None:
        logger.debug("Fetching fun fact for %s", request.country.key)
        self._pool.start(_FactTask(self._service, request, self._signals))

    def _deliver(self, request: FactRequest, text: str) -> None:
        self._on_result(request, text)
