"""HTML rendering for the configuration panel."""

from html import escape
from typing import Optional

from random_sample.library.base import Item
from .state import MAX_PANEL_SAMPLE_SIZE, MESSAGE_TIMEOUT_SECONDS, PanelMessage, PanelState

PAGE_STYLE = """
.random-sample-config { max-width: 600px; margin: 0 auto; padding: 20px; }
.config-section { margin-bottom: 30px; padding: 20px; border: 1px solid #ddd; border-radius: 8px; }
.library-selection { display: flex; flex-direction: column; gap: 10px; }
.library-item { display: flex; align-items: center; gap: 10px; padding: 10px; border: 1px solid #eee; border-radius: 4px; }
.library-name { font-weight: bold; }
.library-type { color: #666; font-size: 0.9em; }
.config-actions { display: flex; gap: 10px; margin-top: 30px; }
.message { padding: 10px; margin-top: 10px; border-radius: 4px; }
.message.success { background-color: #d4edda; color: #155724; }
.message.error { background-color: #f8d7da; color: #721c24; }
"""


def _checked(flag: bool) -> str:
    return " checked" if flag else ""


def render_library(library: Item, selected: bool) -> str:
    library_id = escape(str(library.get("Id", "")))
    name = escape(str(library.get("Name", "")))
    collection_type = escape(str(library.get("CollectionType") or "Mixed"))
    return (
        '<label class="library-item">'
        f'<input type="checkbox" name="library" value="{library_id}"{_checked(selected)}>'
        f'<span class="library-name">{name}</span>'
        f'<span class="library-type">({collection_type})</span>'
        '</label>'
    )


def render_message(message: Optional[PanelMessage]) -> str:
    if message is None:
        return ""
    timeout_ms = int(MESSAGE_TIMEOUT_SECONDS * 1000)
    return (
        f'<div class="message {escape(message.kind)}" data-timeout="{timeout_ms}">'
        f'{escape(message.text)}</div>'
    )


def render_panel(state: PanelState, action_url: str = "") -> str:
    """Render the configuration form for a panel state.

    Pure function: the output depends only on its arguments.

    Args:
        state: Panel state to render
        action_url: URL the form posts to (same page when empty)

    Returns:
        Complete HTML document
    """
    settings = state.settings
    selected = set(settings.selected_libraries)
    libraries = "".join(
        render_library(library, library.get("Id") in selected)
        for library in state.libraries
    )

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Random Library Sample</title>
<style>{PAGE_STYLE}</style>
</head>
<body>
<form class="random-sample-config" method="post" action="{escape(action_url)}">
  <h2>Random Library Sample Configuration</h2>

  <div class="config-section">
    <h3>Sample Size</h3>
    <input type="number" id="sampleSize" name="sampleSize" min="1" max="{MAX_PANEL_SAMPLE_SIZE}" value="{settings.sample_size}">
    <small>Number of random items to show (1-{MAX_PANEL_SAMPLE_SIZE})</small>
  </div>

  <div class="config-section">
    <h3>Content Types</h3>
    <label><input type="checkbox" id="includeMovies" name="includeMovies"{_checked(settings.include_movies)}> Include Movies</label>
    <label><input type="checkbox" id="includeTvShows" name="includeTvShows"{_checked(settings.include_tv_shows)}> Include TV Shows</label>
    <label><input type="checkbox" id="includeMusic" name="includeMusic"{_checked(settings.include_music)}> Include Music</label>
  </div>

  <div class="config-section">
    <h3>Select Libraries</h3>
    <div class="library-selection">{libraries}</div>
  </div>

  <div class="config-actions">
    <button type="submit" name="action" value="save" id="saveConfig">Save Configuration</button>
    <button type="submit" name="action" value="test" id="testSection">Test Section</button>
  </div>

  <div id="messageContainer">{render_message(state.message)}</div>
</form>
<script>
document.querySelectorAll('#messageContainer .message').forEach(function (el) {{
  setTimeout(function () {{ el.remove(); }}, parseInt(el.dataset.timeout, 10));
}});
</script>
</body>
</html>
"""
