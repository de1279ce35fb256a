"""Streamlit frontend for snippetbox.

Provides a UI for managing snippets, filling in their arguments,
copying the result, and importing/exporting snippet collections.
"""

import logging
import os
from typing import Any

import httpx
import streamlit as st

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

# Page config
st.set_page_config(
    page_title="snippetbox",
    page_icon="✂️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# API Client
# =============================================================================


class APIClient:
    """Simple API client for the Streamlit frontend."""

    def __init__(self, base_url: str):
        """Initialize the API client.

        Args:
            base_url: Base URL of the API.
        """
        self.base_url = base_url.rstrip("/")

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        return httpx.request(method, f"{self.base_url}{path}", timeout=10.0, **kwargs)

    def list_snippets(self, search: str = "") -> list[dict[str, Any]]:
        """List snippets matching a keyword/name search."""
        params = {"search": search} if search else {}
        try:
            response = self._request("GET", "/snippets", params=params)
            response.raise_for_status()
            return response.json().get("snippets", [])
        except httpx.HTTPError as e:
            logger.error(f"Listing snippets failed: {e}")
            st.error(f"Could not load snippets: {e}")
            return []

    def save_snippet(self, data: dict[str, Any], snippet_id: int | None = None) -> bool:
        """Create a snippet, or update it when ``snippet_id`` is given."""
        try:
            if snippet_id is None:
                response = self._request("POST", "/snippets", json=data)
            else:
                response = self._request("PATCH", f"/snippets/{snippet_id}", json=data)
            response.raise_for_status()
            return True
        except httpx.HTTPStatusError as e:
            logger.error(f"Saving snippet failed: {e.response.status_code} - {e.response.text}")
            st.error(f"Save failed: {e.response.status_code}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Saving snippet failed: {e}")
            st.error(f"Save failed: {e}")
            return False

    def delete_snippet(self, snippet_id: int) -> bool:
        try:
            response = self._request("DELETE", f"/snippets/{snippet_id}")
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.error(f"Deleting snippet failed: {e}")
            st.error(f"Delete failed: {e}")
            return False

    def get_arguments(self, snippet_id: int) -> list[dict[str, Any]]:
        try:
            response = self._request("GET", f"/snippets/{snippet_id}/arguments")
            response.raise_for_status()
            return response.json().get("arguments", [])
        except httpx.HTTPError as e:
            logger.error(f"Fetching arguments failed: {e}")
            return []

    def execute(self, snippet_id: int, values: dict[str, str]) -> dict[str, Any] | None:
        try:
            response = self._request(
                "POST", f"/snippets/{snippet_id}/execute", json={"values": values}
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Execution failed: {e}")
            st.error(f"Execution failed: {e}")
            return None

    def copy(self, text: str) -> tuple[bool, str]:
        """Copy text to the clipboard; returns (ok, message)."""
        try:
            response = self._request("POST", "/clipboard/copy", json={"text": text})
        except httpx.HTTPError as e:
            return False, str(e)
        if response.status_code == 200:
            return True, "Copied to clipboard"
        return False, response.json().get("detail", "Clipboard write failed")

    def preview_import(self, raw: str) -> tuple[list[dict[str, Any]], list[str]]:
        """Validate an import document; returns (entries, errors)."""
        try:
            response = self._request(
                "POST",
                "/snippets/import/preview",
                content=raw.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            return [], [str(e)]
        if response.status_code == 200:
            return response.json().get("snippets", []), []
        body = response.json()
        return [], (body.get("extra") or {}).get("errors", [body.get("detail", "Invalid import")])

    def import_snippets(self, raw: str) -> int | None:
        try:
            response = self._request(
                "POST",
                "/snippets/import",
                content=raw.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
            return response.json().get("imported", 0)
        except httpx.HTTPError as e:
            logger.error(f"Import failed: {e}")
            st.error(f"Import failed: {e}")
            return None

    def export_snippets(self) -> str:
        try:
            response = self._request("GET", "/snippets/export")
            response.raise_for_status()
            return response.text
        except httpx.HTTPError as e:
            logger.error(f"Export failed: {e}")
            st.error(f"Export failed: {e}")
            return "[]"

    def health_check(self) -> bool:
        """Check if the API is healthy."""
        try:
            response = httpx.get(f"{self.base_url}/health", timeout=5.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False


# =============================================================================
# UI Components
# =============================================================================


def render_sidebar(client: APIClient) -> None:
    """Render the sidebar with connection status and placeholder help."""
    with st.sidebar:
        st.title("✂️ snippetbox")

        st.divider()

        if client.health_check():
            st.success("✅ API Connected")
        else:
            st.error("❌ API Disconnected")
            st.info(f"API URL: {API_BASE_URL}")

        st.divider()

        st.subheader("Placeholders")
        st.markdown("""
        - `{clipboard}`: current clipboard text
        - `{cursor}`: where the cursor lands
        - `{argument name="x" options="a,b" default="a"}`: asked when expanding
        """)

        st.caption(f"API: `{API_BASE_URL}`")


def render_snippet_form(client: APIClient, snippet: dict[str, Any] | None = None) -> None:
    """Render the create/edit form."""
    key = f"form_{snippet['id']}" if snippet else "form_new"
    with st.form(key, clear_on_submit=snippet is None):
        keyword = st.text_input("Keyword", value=snippet["keyword"] if snippet else "")
        name = st.text_input("Name", value=snippet["name"] if snippet else "")
        text = st.text_area("Text", value=snippet["text"] if snippet else "", height=150)
        active = st.checkbox("Active", value=snippet["active"] if snippet else True)

        if st.form_submit_button("Save", type="primary"):
            if not (keyword and name and text):
                st.warning("Keyword, name and text are required")
                return
            data = {"keyword": keyword, "name": name, "text": text, "active": active}
            if client.save_snippet(data, snippet["id"] if snippet else None):
                st.success("Saved")
                st.rerun()


def render_snippets_tab(client: APIClient) -> None:
    """Render the searchable snippet list."""
    search = st.text_input("Search by keyword or name...", key="search")
    snippets = client.list_snippets(search)

    with st.expander("➕ New snippet"):
        render_snippet_form(client)

    if not snippets:
        st.info("No snippets found.")
        return

    for snippet in snippets:
        badge = "" if snippet["active"] else " (inactive)"
        with st.expander(f"`{snippet['keyword']}` {snippet['name']}{badge}"):
            st.code(snippet["text"], language=None)
            render_snippet_form(client, snippet)
            if st.button("Delete", key=f"delete_{snippet['id']}"):
                if client.delete_snippet(snippet["id"]):
                    st.rerun()


def render_expand_tab(client: APIClient) -> None:
    """Render the argument form and execution result for one snippet."""
    snippets = client.list_snippets()
    if not snippets:
        st.info("Create a snippet first.")
        return

    labels = {f"{s['keyword']} ({s['name']})": s for s in snippets}
    snippet = labels[st.selectbox("Snippet", list(labels))]

    values: dict[str, str] = {}
    seen: set[str] = set()
    for argument in client.get_arguments(snippet["id"]):
        name = argument["name"]
        if name in seen:
            continue
        seen.add(name)

        options = argument.get("options")
        default = argument.get("default") or ""
        if options:
            index = options.index(default) if default in options else 0
            values[name] = st.selectbox(name, options, index=index, key=f"arg_{name}")
        else:
            values[name] = st.text_input(name, value=default, key=f"arg_{name}")

    if st.button("Expand", type="primary"):
        outcome = client.execute(snippet["id"], values)
        if outcome is not None:
            st.session_state["last_result"] = outcome

    outcome = st.session_state.get("last_result")
    if outcome:
        st.text_area("Result", value=outcome["result"], height=150)
        if outcome.get("cursor_index") is not None:
            st.caption(f"Cursor at offset {outcome['cursor_index']}")

        if st.button("Copy to clipboard"):
            ok, message = client.copy(outcome["result"])
            if ok:
                st.success(message)
            else:
                st.error(f"{message}. Copy the text above manually.")


def render_exchange_tab(client: APIClient) -> None:
    """Render import (paste or upload) and export."""
    st.subheader("📥 Import")

    uploaded = st.file_uploader("Select snippets JSON", type=["json"])
    raw = st.text_area(
        "Or paste JSON",
        placeholder='[\n  {\n    "keyword": "email",\n    "name": "My Email",\n    "text": "hello@example.com"\n  }\n]',
        height=150,
    )
    if uploaded is not None:
        raw = uploaded.getvalue().decode("utf-8")

    if raw.strip() and st.button("Preview"):
        entries, errors = client.preview_import(raw)
        if errors:
            st.error("Invalid import:\n\n" + "\n".join(f"- {error}" for error in errors))
        else:
            st.session_state["import_raw"] = raw
            st.session_state["import_preview"] = entries

    preview = st.session_state.get("import_preview")
    if preview:
        st.write(f"Found {len(preview)} snippet(s) to import:")
        st.dataframe(preview, use_container_width=True, hide_index=True)
        if st.button(f"Import {len(preview)} Snippet(s)", type="primary"):
            imported = client.import_snippets(st.session_state["import_raw"])
            if imported is not None:
                st.success(f"Imported {imported} snippet(s)")
                st.session_state.pop("import_preview", None)

    st.divider()

    st.subheader("📤 Export")
    st.download_button(
        "Download snippets.json",
        data=client.export_snippets(),
        file_name="snippets.json",
        mime="application/json",
    )


# =============================================================================
# Main App
# =============================================================================


def main() -> None:
    """Main application entry point."""
    client = APIClient(API_BASE_URL)

    render_sidebar(client)

    st.title("Snippets")

    tab1, tab2, tab3 = st.tabs(["Snippets", "Expand", "Import / Export"])

    with tab1:
        render_snippets_tab(client)

    with tab2:
        render_expand_tab(client)

    with tab3:
        render_exchange_tab(client)


if __name__ == "__main__":
    main()
