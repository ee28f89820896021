from __future__ import annotations

from html import escape

from .paginator import PageView
from .table import Row


def _row(cells: Row, tag: str) -> str:
    return "<tr>" + "".join(f"<{tag}>{escape(cell)}</{tag}>" for cell in cells) + "</tr>"


def render_html(page: PageView, base_path: str = "/results") -> str:
    """Render one page as an HTML table with Prev/Next controls.

    The first row of the page always goes in the ``<th>`` header row.
    """
    rows = [_row(page.header, "th"), *(_row(r, "td") for r in page.body)]
    table_rows = "\n    ".join(rows)
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>BIP Results</title></head>
<body>
  <table border="1">
    {table_rows}
  </table>
  <div>
    <form method="post" action="{escape(base_path)}/prev" style="display:inline">
      <button type="submit">Prev</button>
    </form>
    <span id="page">{page.page_index + 1}</span> / {page.page_count}
    <form method="post" action="{escape(base_path)}/next" style="display:inline">
      <button type="submit">Next</button>
    </form>
  </div>
</body>
</html>
"""
