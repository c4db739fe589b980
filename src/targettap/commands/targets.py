"""Target discovery commands.

PUBLIC API:
  - targets: Discover and list debuggable targets
  - refresh: Clear the icon cache and rediscover
  - target: Show detail rows of one target
"""

from targettap.app import app
from targettap.commands._errors import error_response
from targettap.commands._utils import TARGET_HEADERS, build_info_response, build_table_response, target_rows
from targettap.services.discovery import DiscoveryResult


def _result_table(result: DiscoveryResult, title: str) -> dict:
    if not result.ok:
        return error_response("invalid_response", endpoint=getattr(result.error, "endpoint", None))

    count = len(result.targets)
    return build_table_response(
        title=title,
        headers=TARGET_HEADERS,
        rows=target_rows(result.targets),
        summary=f"{count} target{'s' if count != 1 else ''} available",
        warnings=result.warnings or None,
    )


@app.command(display="markdown", fastmcp={"type": "tool", "mime_type": "text/markdown"})
def targets(state) -> dict:
    """Discover debuggable targets on the configured DevTools endpoint.

    Pages are listed first, then other types by name, each sorted by title.

    Returns:
        Table of targets in markdown
    """
    result = state.provider.call(state.provider.discover())
    return _result_table(result, "Targets")


@app.command(display="markdown", fastmcp={"type": "tool", "mime_type": "text/markdown"})
def refresh(state) -> dict:
    """Clear downloaded icons and discover targets again.

    Returns:
        Table of targets in markdown
    """
    result = state.provider.call(state.provider.refresh())
    return _result_table(result, "Targets (refreshed)")


@app.command(display="markdown", fastmcp={"type": "tool", "mime_type": "text/markdown"})
def target(state, index: int = None, target_id: str = None) -> dict:  # pyright: ignore[reportArgumentType]
    """Show details of one target from the last discovery.

    Args:
        index: Row index from `targets()`
        target_id: Target ID or unique ID prefix

    Returns:
        Target details in markdown
    """
    result = state.provider.last_result
    if result is None or not result.targets:
        return error_response("no_targets")

    found = None
    if target_id:
        found = result.find(target_id)
    elif index is not None and 0 <= index < len(result.targets):
        found = result.targets[index]

    if found is None:
        return error_response("not_found", index=index, target_id=target_id)

    fields = {prop.name: prop.value for prop in found.children()}
    fields["icon"] = str(found.icon_path) if found.icon_path else None
    return build_info_response(title=found.label, fields=fields)
