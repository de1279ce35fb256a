"""API tests for the snippetbox HTTP surface."""

import json

import pytest


def make_snippet(client, keyword="sig", name="Signature", text="Best,\n{cursor}", **extra):
    """Create a snippet through the API and return its JSON."""
    response = client.post(
        "/snippets",
        json={"keyword": keyword, "name": name, "text": text, **extra},
    )
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# CRUD Tests
# =============================================================================


class TestSnippetCrud:
    """Test suite for /snippets CRUD and search."""

    def test_health(self, client):
        """Test the health endpoint reports the clipboard backend."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["clipboard"] == "memory"

    def test_create_get_update_delete(self, client):
        """Test the full lifecycle of one snippet."""
        created = make_snippet(client)
        snippet_id = created["id"]

        assert created["active"] is True
        assert client.get(f"/snippets/{snippet_id}").json()["name"] == "Signature"

        response = client.patch(f"/snippets/{snippet_id}", json={"name": "Sign-off", "active": False})
        assert response.status_code == 200
        assert response.json()["name"] == "Sign-off"
        assert response.json()["active"] is False
        assert response.json()["text"] == "Best,\n{cursor}"

        assert client.delete(f"/snippets/{snippet_id}").status_code == 204
        assert client.get(f"/snippets/{snippet_id}").status_code == 404
        assert client.delete(f"/snippets/{snippet_id}").status_code == 404

    def test_update_missing(self, client):
        """Test that patching an unknown snippet is a 404."""
        assert client.patch("/snippets/12345", json={"text": "x"}).status_code == 404

    def test_create_requires_fields(self, client):
        """Test that an empty text is rejected with the standard error body."""
        response = client.post("/snippets", json={"keyword": "k", "name": "n", "text": ""})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_search(self, client):
        """Test search over keyword and name, and the active filter."""
        make_snippet(client, keyword="addr", name="Home Address", text="1 Main St")
        make_snippet(client, keyword="mail", name="Work email", text="me@work")
        make_snippet(client, keyword="old", name="Old address", text="x", active=False)

        found = client.get("/snippets", params={"search": "address"}).json()
        assert found["total"] == 2
        assert {s["keyword"] for s in found["snippets"]} == {"addr", "old"}

        active = client.get("/snippets", params={"search": "address", "active_only": True}).json()
        assert [s["keyword"] for s in active["snippets"]] == ["addr"]

        assert client.get("/snippets").json()["total"] == 3


# =============================================================================
# Template Tests
# =============================================================================


class TestTemplates:
    """Test suite for argument discovery and execution."""

    def test_parse(self, client):
        """Test argument discovery for ad-hoc text."""
        response = client.post(
            "/templates/parse",
            json={"text": '{argument name="a" default="x" options="x, y"} {argument}'},
        )

        assert response.status_code == 200
        assert response.json()["arguments"] == [
            {"name": "a", "options": ["x", "y"], "default": "x"}
        ]

    def test_execute_ad_hoc(self, client):
        """Test executing ad-hoc text with the clipboard."""
        client.app.state.executor.clipboard.text = "pasted"

        response = client.post(
            "/templates/execute",
            json={
                "text": 'Hi {argument name="who" default="Bob"}, {clipboard}{cursor}',
                "values": {},
            },
        )

        assert response.json() == {"result": "Hi Bob, pasted", "cursor_index": 14}

    def test_execute_requires_text(self, client):
        """Test that ad-hoc execution needs template text."""
        assert client.post("/templates/execute", json={"values": {}}).status_code == 422

    def test_stored_snippet_arguments_and_execute(self, client):
        """Test executing a stored snippet with chosen argument values."""
        snippet = make_snippet(
            client,
            keyword="greet",
            name="Greeting",
            text='Dear {argument name="title" options="Mr,Ms" default="Ms"} {argument name="who"},{cursor}',
        )

        arguments = client.get(f"/snippets/{snippet['id']}/arguments").json()["arguments"]
        assert [argument["name"] for argument in arguments] == ["title", "who"]

        response = client.post(
            f"/snippets/{snippet['id']}/execute",
            json={"values": {"who": "Smith"}},
        )
        assert response.json() == {"result": "Dear Ms Smith,", "cursor_index": 14}

    def test_execute_missing_snippet(self, client):
        """Test that executing an unknown snippet is a 404."""
        assert client.post("/snippets/999/execute", json={"values": {}}).status_code == 404

    def test_failed_clipboard_read_is_empty(self, client):
        """Test that execution survives an unreadable clipboard."""
        client.app.state.executor.clipboard.fail_reads = True

        response = client.post("/templates/execute", json={"text": "[{clipboard}]"})

        assert response.status_code == 200
        assert response.json()["result"] == "[]"


# =============================================================================
# Clipboard Tests
# =============================================================================


class TestClipboardCopy:
    """Test suite for /clipboard/copy."""

    def test_copy(self, client):
        """Test that text lands on the clipboard."""
        response = client.post("/clipboard/copy", json={"text": "done"})

        assert response.json() == {"copied": True, "length": 4}
        assert client.app.state.executor.clipboard.text == "done"

    def test_copy_failure_returns_text(self, client):
        """Test that a failed write echoes the text for manual copying."""
        client.app.state.executor.clipboard.fail_writes = True

        response = client.post("/clipboard/copy", json={"text": "copy me"})

        assert response.status_code == 502
        body = response.json()
        assert body["error_code"] == "CLIPBOARD_WRITE_FAILED"
        assert body["extra"]["text"] == "copy me"


# =============================================================================
# Import/Export Tests
# =============================================================================


class TestImportExport:
    """Test suite for JSON import and export."""

    @pytest.fixture
    def document(self):
        """A valid two-entry import document."""
        return [
            {"keyword": "email", "name": "My Email", "text": "hello@example.com"},
            {"keyword": "sig", "name": "Signature", "text": "Best,{cursor}"},
        ]

    def test_import(self, client, document):
        """Test that a valid document creates every entry."""
        response = client.post("/snippets/import", content=json.dumps(document))

        assert response.status_code == 201
        assert response.json()["imported"] == 2
        assert client.get("/snippets").json()["total"] == 2

    def test_import_all_or_nothing(self, client, document):
        """Test that one bad entry means nothing is created."""
        document.append({"keyword": "broken", "text": "no name"})

        response = client.post("/snippets/import", content=json.dumps(document))

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "IMPORT_VALIDATION_FAILED"
        assert body["extra"]["errors"] == ["entry 2: missing field 'name'"]
        assert client.get("/snippets").json()["total"] == 0

    def test_import_rejects_non_array(self, client):
        """Test that a non-array document is rejected."""
        response = client.post("/snippets/import", content='{"keyword": "k"}')

        assert response.status_code == 422
        assert client.get("/snippets").json()["total"] == 0

    def test_preview_stores_nothing(self, client, document):
        """Test that preview validates without creating snippets."""
        response = client.post("/snippets/import/preview", content=json.dumps(document))

        assert response.status_code == 200
        assert response.json()["total"] == 2
        assert client.get("/snippets").json()["total"] == 0

    def test_export(self, client):
        """Test that export contains only keyword, name and text."""
        make_snippet(client, keyword="a", name="A", text="one", active=False)

        response = client.get("/snippets/export")

        assert response.status_code == 200
        assert "attachment" in response.headers["content-disposition"]
        assert response.json() == [{"keyword": "a", "name": "A", "text": "one"}]


# =============================================================================
# Auto-expansion Tests
# =============================================================================


class TestExpansion:
    """Test suite for /expansion."""

    def test_disabled_by_default(self, client):
        """Test that keys do nothing until expansion is enabled."""
        make_snippet(client)

        status_body = client.get("/expansion").json()
        assert status_body == {"enabled": False, "keywords": ["sig"]}

        response = client.post("/expansion/keys", json={"keys": ["s", "i", "g", "space"]})
        assert response.json() == {"expansions": []}

    def test_keys_expand_keyword(self, client):
        """Test that a typed keyword comes back executed."""
        make_snippet(client, text='Best,{cursor}\n{argument name="who" default="Ann"}')
        assert client.post("/expansion/enable").json()["enabled"] is True

        response = client.post("/expansion/keys", json={"keys": ["s", "i", "g", "space"]})

        assert response.json() == {
            "expansions": [
                {"keyword": "sig", "backspaces": 3, "result": "Best,\nAnn", "cursor_index": 5}
            ]
        }

    def test_keyword_map_follows_store(self, client):
        """Test that deactivated and deleted snippets stop expanding."""
        first = make_snippet(client, keyword="one", text="1")
        second = make_snippet(client, keyword="two", text="2")

        client.patch(f"/snippets/{first['id']}", json={"active": False})
        assert client.get("/expansion").json()["keywords"] == ["two"]

        client.delete(f"/snippets/{second['id']}")
        assert client.post("/expansion/sync").json()["keywords"] == []

    def test_disable(self, client):
        """Test that expansion can be switched off again."""
        client.post("/expansion/enable")

        assert client.post("/expansion/disable").json()["enabled"] is False


# =============================================================================
# Log Tests
# =============================================================================


class TestLogs:
    """Test suite for /logs."""

    def test_recent_logs(self, client):
        """Test that application activity shows up in the log buffer."""
        make_snippet(client)
        client.get("/snippets/4242")

        body = client.get("/logs").json()
        assert body["capacity"] == 1000
        assert any("Created snippet" in entry["message"] for entry in body["entries"])

        warnings = client.get("/logs", params={"level": "warning"}).json()["entries"]
        assert any("Snippet not found: 4242" in entry["message"] for entry in warnings)
        assert all(entry["level"] == "warning" for entry in warnings)

        short = client.get("/logs", params={"level": "warn"}).json()["entries"]
        assert any("Snippet not found: 4242" in entry["message"] for entry in short)

    def test_clear_logs(self, client):
        """Test that DELETE empties the buffer."""
        make_snippet(client)

        assert client.delete("/logs").status_code == 204

        messages = [entry.message for entry in client.app.state.log_buffer.entries()]
        assert not any("Created snippet" in message for message in messages)
        assert not any("Clearing" in message for message in messages)
