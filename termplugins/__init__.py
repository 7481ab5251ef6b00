# termplugins/__init__.py
"""
Built-in command plugins.

Each subpackage is a category; its `entrypoint.py` defines @command classes
that `termcore.interface.load_commands` registers into a session's registry.
"""
