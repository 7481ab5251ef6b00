#!/usr/bin/env python3
# termcore/interface/cancellation.py
from __future__ import annotations

import threading

from .errors import OperationCancelled


class CancellationToken:
    """
    Cooperative cancellation signal threaded through a whole pipeline.

    Safe to trigger from another thread or a signal handler.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"

