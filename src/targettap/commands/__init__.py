"""targettap command modules.

Command functions are registered via @app.command when their modules are imported.
"""

from targettap.commands import settings, targets

__all__ = ["targets", "settings"]
