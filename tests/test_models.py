from pathlib import Path

from targettap.cdp.models import DiscoveredTarget, RemoteTarget


def test_from_json_reads_cdp_fields():
    target = RemoteTarget.from_json(
        {
            "id": "ABC",
            "type": "page",
            "title": "Home",
            "url": "https://example.com/",
            "webSocketDebuggerUrl": "ws://localhost:9222/devtools/page/ABC",
            "faviconUrl": "https://example.com/favicon.ico",
            "devtoolsFrontendUrl": "/devtools/inspector.html?ws=localhost:9222/devtools/page/ABC",
        }
    )
    assert target.web_socket_debugger_url == "ws://localhost:9222/devtools/page/ABC"
    assert target.favicon_url == "https://example.com/favicon.ico"
    assert target.parent_id == ""


def test_from_json_missing_fields_default_to_empty():
    target = RemoteTarget.from_json({"id": "X", "type": "other", "title": None})
    assert target.title == ""
    assert target.url == ""
    assert target.web_socket_debugger_url == ""


def test_children_are_detail_rows():
    target = DiscoveredTarget(RemoteTarget("ID1", "page", "T", "https://a.b/", "ws://h:1/devtools/page/ID1"))
    children = target.children()
    assert [c.name for c in children] == ["id", "type", "url", "webSocketDebuggerUrl"]
    assert children[0].label == "id: ID1"
    assert all(c.children() == [] for c in children)


def test_label_falls_back_to_url_then_id():
    assert DiscoveredTarget(RemoteTarget("ID1", "page", "", "https://a.b/")).label == "https://a.b/"
    assert DiscoveredTarget(RemoteTarget("ID1", "other", "", "")).label == "ID1"


def test_to_dict_includes_icon_path():
    target = DiscoveredTarget(RemoteTarget("ID1", "page", "T", "u"), icon_path=Path("/tmp/aFavicon.ico"))
    assert target.to_dict()["iconPath"] == "/tmp/aFavicon.ico"
    assert DiscoveredTarget(RemoteTarget("ID1", "page", "T", "u")).to_dict()["iconPath"] is None
