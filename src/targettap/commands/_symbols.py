"""ASCII symbol registry for consistent display across targettap commands.

PUBLIC API:
  - sym: Get ASCII symbol by name with fallback
"""

_SYMBOLS = {
    # Status indicators
    "success": "[OK]",
    "error": "[ERROR]",
    "warning": "[WARN]",
    "info": "[INFO]",
    # Icon states
    "icon": "[x]",
    "no_icon": "[ ]",
    # Data placeholders
    "empty": "-",
    "none": "n/a",
}


def sym(name: str) -> str:
    """Get ASCII symbol by name with fallback to dash.

    Args:
        name: Symbol name from the registry.

    Returns:
        ASCII symbol string, or "-" if name not found.
    """
    return _SYMBOLS.get(name, "-")
