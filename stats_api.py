# stats_api.py - FastAPI + uvicorn, background server
import asyncio, logging, webbrowser
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse
import uvicorn

from swipe_engine import StoreUnavailable, get_stats

log = logging.getLogger("stats")
app = FastAPI(title="Swipe Stats")

LABELS = [
    ("users_total", "Total users"),
    ("profiles_complete", "Complete profiles"),
    ("swipes_total", "Swipes"),
    ("likes_total", "Likes"),
    ("matches_total", "Matches"),
    ("matches_today", "Matches today"),
    ("blocks_total", "Blocks"),
    ("messages_total", "Messages"),
]

DOWN_HTML = """
<html><head><title>Swipe Stats</title></head>
<body style="font-family:system-ui;padding:16px;">
  <h1>Discovery - Realtime Stats</h1>
  <p>Store unavailable, retry shortly.</p>
</body></html>
"""


@app.get("/", response_class=HTMLResponse)
async def index():
    try:
        stats = await get_stats()
    except StoreUnavailable as e:
        log.warning("index: %s", e)
        return HTMLResponse(DOWN_HTML, status_code=503)
    items = "\n".join(f"<li>{label}: <b>{stats.get(key, 0)}</b></li>" for key, label in LABELS)
    html = f"""
    <html><head><title>Swipe Stats</title></head>
    <body style="font-family:system-ui;padding:16px;">
      <h1>Discovery - Realtime Stats</h1>
      <ul>
        {items}
      </ul>
      <p><a href="/stats">/stats</a> (JSON)</p>
    </body></html>
    """
    return html


@app.get("/stats", response_class=JSONResponse)
async def stats():
    try:
        return await get_stats()
    except StoreUnavailable as e:
        log.warning("stats: %s", e)
        return JSONResponse({"ok": False, "error": "store unavailable"}, status_code=503)


@app.get("/healthz")
async def healthz():
    try:
        await get_stats()
    except StoreUnavailable as e:
        log.warning("healthz: %s", e)
        return JSONResponse({"ok": False}, status_code=503)
    return {"ok": True}


async def start_stats_server(host: str="127.0.0.1", port: int=8000, open_browser: bool=False):
    config = uvicorn.Config(app, host=host, port=port, loop="asyncio", log_level="info")
    server = uvicorn.Server(config)
    async def _open():
        await asyncio.sleep(0.8)
        url = f"http://{host}:{port}/"
        if webbrowser.open(url, new=2):
            log.info("Opened browser: %s", url)
        else:
            log.warning("Failed to open browser")
    if open_browser:
        asyncio.create_task(_open())
    await server.serve()
