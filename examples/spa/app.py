"""Single-page app with client-side routing.

Every path that is not an asset answers with ``index.html`` so the
browser-side router can take over.  Assets get ETags, so reloads
revalidate with ``If-None-Match`` and receive ``304 Not Modified``.

``build.py`` shows the embedded variant of the same table.

Run:
    python app.py
"""

from pathlib import Path

from nestbox import ResourceFiles, collect

PUBLIC_DIR = Path(__file__).parent / "public"

files = (
    ResourceFiles("/", collect(PUBLIC_DIR))
    .fallback_not_found_to_root()
    .with_cache_control("no-cache")
)
app = files.asgi()


if __name__ == "__main__":
    from nestbox.server.dev import run_dev_server

    run_dev_server(app, "127.0.0.1", 8000)
