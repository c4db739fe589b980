"""Error responses for targettap commands.

PUBLIC API:
  - error_response: Build formatted error responses
"""

from replkit2.textkit import markdown

_ERRORS = {
    "invalid_response": {
        "message": "No usable target list from the DevTools endpoint",
        "details": "The endpoint did not answer with a JSON array of targets",
        "help": [
            "Check the browser runs with `--remote-debugging-port`",
            "Check `[remote]` hostname/port in targettap.toml",
            "Run `settings()` to see the active endpoint",
        ],
    },
    "no_targets": {
        "message": "No targets discovered",
        "details": "Run `targets()` or `refresh()` first",
    },
    "not_found": {"message": "Target not found"},
}


def error_response(error_key: str, custom_message: str | None = None, **kwargs) -> dict:
    """Build consistent error response in markdown.

    Args:
        error_key: Key from error templates or custom identifier.
        custom_message: Override default message. Defaults to None.
        **kwargs: Additional context to add to error response.

    Returns:
        Markdown dict with error formatting.
    """
    error_info = _ERRORS.get(error_key, {})
    message = custom_message or error_info.get("message", "Error occurred")

    builder = markdown().element("alert", message=message, level="error")

    if details := error_info.get("details"):
        builder.text(details)

    if help_items := error_info.get("help"):
        builder.text("**How to fix:**")
        builder.list_(help_items)

    for key, value in kwargs.items():
        if value:
            builder.text(f"_{key}: {value}_")

    return builder.build()
