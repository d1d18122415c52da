from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from swarmthing.ipc.server import start_listener
from swarmthing.tools.builtin.web import extract_text, search

PAGE = """
<html>
  <head><title>ignored</title><style>body { color: red; }</style></head>
  <body>
    <h1>Swarm   Thing</h1>
    <script>var hidden = 1;</script>
    <p>one two
       three</p>
  </body>
</html>
"""


def test_extract_text_normalises_whitespace():
    assert extract_text(PAGE, 200) == "Swarm Thing one two three"


def test_extract_text_word_limit():
    html = "<html><body>" + " ".join(f"w{i}" for i in range(500)) + "</body></html>"
    words = extract_text(html, 200).split()
    assert len(words) == 200
    assert words[-1] == "w199"


def test_extract_text_without_body():
    assert extract_text("", 200) == "No body found"


def test_search_mock():
    assert search("agents").startswith("Mock search results for 'agents'")


def test_scrape_url_against_local_page(manager, free_port: int):
    app = FastAPI()

    @app.get("/page", response_class=HTMLResponse)
    async def page():
        return PAGE

    listener = start_listener(app, "127.0.0.1", free_port)
    try:
        assert listener.wait_ready()
        text = manager.execute_tool("scrape_url", [f"http://127.0.0.1:{free_port}/page"])
    finally:
        listener.stop()

    assert text == "Swarm Thing one two three"


def test_scrape_url_reports_fetch_errors(manager, free_port: int):
    text = manager.execute_tool("scrape_url", [f"http://127.0.0.1:{free_port}/nothing"])
    assert text.startswith("Error fetching URL")
