from __future__ import annotations

from html import escape
from typing import Any

PAGE_STYLE = """
    body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
    .song-header { border-bottom: 2px solid #333; padding-bottom: 10px; margin-bottom: 20px; }
    .chord-content { white-space: pre-wrap; font-family: monospace; background: #f5f5f5; padding: 20px; border-radius: 5px; }
    .notes { background: #fff3cd; padding: 15px; border-radius: 5px; margin-top: 20px; white-space: pre-wrap; }
    .back-link { display: inline-block; margin-top: 20px; color: #007bff; text-decoration: none; }
"""


def render_share_page(song: dict[str, Any]) -> str:
    """Read-only HTML view of a saved song. All fields are escaped."""
    title = escape(song.get("title") or "")
    artist = escape(song.get("artist") or "")
    source_url = song.get("source_url") or ""
    notes = song.get("personal_notes") or ""

    source_block = (
        f'<p><a href="{escape(source_url)}" target="_blank" rel="noopener">Original Source</a></p>'
        if source_url
        else ""
    )
    notes_block = (
        f'<div class="notes"><strong>Notes:</strong><br>{escape(notes)}</div>' if notes else ""
    )

    return f"""<!DOCTYPE html>
<html>
<head>
  <title>{title} - {artist}</title>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <style>{PAGE_STYLE}</style>
</head>
<body>
  <div class="song-header">
    <h1>{title}</h1>
    <h2>by {artist}</h2>
    {source_block}
  </div>
  <div class="chord-content">{escape(song.get("chord_content") or "")}</div>
  {notes_block}
  <a href="/" class="back-link">&larr; Back to Chord Finder</a>
</body>
</html>
"""


def render_not_found_page() -> str:
    return """<!DOCTYPE html>
<html>
<head>
  <title>Song Not Found</title>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
</head>
<body style="font-family: Arial, sans-serif; text-align: center; padding: 50px;">
  <h1>Song Not Found</h1>
  <p>The shared song could not be found.</p>
  <a href="/">Go to Chord Finder</a>
</body>
</html>
"""
