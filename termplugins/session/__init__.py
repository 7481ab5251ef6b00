# termplugins/session/__init__.py
from __future__ import annotations

CATEGORY_DESCRIPTION = "Inspect and manage the terminal session (help, history, logs)."
