import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from plinko.config import settings
from plinko.routers import admin, health, rounds, verify
from plinko.utils.logging_utils import configure_logging

# --- .env support ---
load_dotenv()

configure_logging(settings.log_level)

# ------------------------------------------------------------------------------
# FastAPI + static
# ------------------------------------------------------------------------------
app = FastAPI(title="Provably Fair Plinko", version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_here = os.path.dirname(__file__)
_static_root = os.path.join(os.path.dirname(_here), "static")
if not os.path.isdir(_static_root):
    os.makedirs(_static_root, exist_ok=True)
app.mount("/static", StaticFiles(directory=_static_root), name="static")


@app.get("/", response_class=HTMLResponse)
async def index():
    index_path = os.path.join(_static_root, "index.html")
    if os.path.exists(index_path):
        with open(index_path, "r", encoding="utf-8") as f:
            return HTMLResponse(f.read())
    return HTMLResponse("""
<!doctype html><meta charset="utf-8"><title>Provably Fair Plinko</title>
<h1>Provably Fair Plinko</h1>
<p>Static client missing. Place <code>static/index.html</code> in the project.</p>
<p>Verify any round at <code>/api/verify</code>.</p>
""".strip())


# ------------------------------------------------------------------------------
# Include routers
# ------------------------------------------------------------------------------
app.include_router(health.router)
app.include_router(rounds.router)
app.include_router(verify.router)
app.include_router(admin.router)
