# termplugins/text/__init__.py
from __future__ import annotations

"""
Text filters: echo, cat, grep, head, tail, wc.

All of them read their positional file arguments, or stdin when none are given.
"""

CATEGORY_DESCRIPTION = "Print, filter and count lines of text."
