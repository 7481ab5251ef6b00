# termplugins/fs/__init__.py
from __future__ import annotations

CATEGORY_DESCRIPTION = "Navigate and list the filesystem."
