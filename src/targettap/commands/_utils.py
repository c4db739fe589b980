"""Shared formatting helpers for targettap command modules.

PUBLIC API:
  - truncate_string: Truncate strings with ellipsis
  - target_rows: Table rows for a list of discovered targets
  - build_table_response: Build table responses in markdown
  - build_info_response: Build info display responses in markdown
"""

from replkit2.textkit import markdown

from targettap.cdp.models import DiscoveredTarget
from targettap.commands._symbols import sym

TARGET_HEADERS = ["Index", "Type", "Title", "URL", "ID", "Icon"]


def truncate_string(text: str, max_length: int, mode: str = "end") -> str:
    """Truncate string with ellipsis for table display.

    Args:
        text: String to truncate.
        max_length: Maximum length including ellipsis.
        mode: "end" keeps the start, "middle" keeps both ends. Defaults to "end".

    Returns:
        Truncated string, or the empty symbol for empty input.
    """
    if not text:
        return sym("empty")

    text = text.replace("\n", " ").replace("\t", " ")

    if len(text) <= max_length:
        return text

    if max_length < 5:
        return text[:max_length]

    if mode == "middle":
        keep_start = (max_length - 3) // 2
        keep_end = max_length - 3 - keep_start
        return f"{text[:keep_start]}...{text[-keep_end:]}"

    return f"{text[: max_length - 3]}..."


def target_rows(targets: list[DiscoveredTarget]) -> list[dict]:
    """Format discovered targets as table rows, keeping their order."""
    return [
        {
            "Index": str(i),
            "Type": t.type or sym("none"),
            "Title": truncate_string(t.title, 30),
            "URL": truncate_string(t.url, 40, mode="middle"),
            "ID": truncate_string(t.id, 8 + 3),
            "Icon": sym("icon") if t.icon_path else sym("no_icon"),
        }
        for i, t in enumerate(targets)
    ]


def build_table_response(
    title: str, headers: list[str], rows: list[dict], summary: str | None = None, warnings: list[str] | None = None
) -> dict:
    """Build table response in markdown format.

    Args:
        title: Table title.
        headers: Column headers.
        rows: Data rows as dicts.
        summary: Optional summary text.
        warnings: Optional warning messages.

    Returns:
        Markdown dict with formatted table.
    """
    builder = markdown().heading(title, level=2)

    for warning in warnings or []:
        builder.element("alert", message=warning, level="warning")

    if rows:
        builder.element("table", headers=headers, rows=rows)
    else:
        builder.text("_No targets available_")

    if summary:
        builder.text(f"_{summary}_")

    return builder.build()


def build_info_response(title: str, fields: dict) -> dict:
    """Build info display response in markdown format.

    Args:
        title: Info display title.
        fields: Dict of field names to values. None values are skipped.

    Returns:
        Markdown dict with formatted info display.
    """
    builder = markdown().heading(title, level=2)

    for key, value in fields.items():
        if value is not None:
            builder.text(f"**{key}:** {value}")

    return builder.build()
