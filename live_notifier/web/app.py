from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import socketio
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse
from pydantic import BaseModel

from live_notifier.utils import canonical_name
from live_notifier.version import __version__


if TYPE_CHECKING:
    import uvicorn

    from live_notifier.core.client import LiveNotifier
    from live_notifier.web.gui_manager import WebGUIManager


logger = logging.getLogger("LiveNotifier")

# The page is shipped inside the package, next to this module
INDEX_FILE = Path(__file__).with_name("index.html")

# Create FastAPI app
app = FastAPI(title="Live Notifier Web", version=__version__)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create Socket.IO server
sio = socketio.AsyncServer(
    async_mode="asgi", cors_allowed_origins="*", logger=False, engineio_logger=False
)

# Wrap with ASGI app
socket_app = socketio.ASGIApp(sio, app)

# Global references (set by __main__)
gui_manager: WebGUIManager | None = None
notifier: LiveNotifier | None = None
_server_instance: uvicorn.Server | None = None


def set_managers(gui: WebGUIManager, client: LiveNotifier):
    """Called by __main__ to set up references"""
    global gui_manager, notifier
    gui_manager = gui
    notifier = client
    gui.set_socketio(sio)


def _require() -> tuple[WebGUIManager, LiveNotifier]:
    if not gui_manager or not notifier:
        raise HTTPException(status_code=503, detail="GUI not initialized")
    return gui_manager, notifier


# Pydantic models for API
class ChannelAddRequest(BaseModel):
    name: str


class CredentialsRequest(BaseModel):
    client_id: str
    client_secret: str


class SettingsUpdate(BaseModel):
    auto_open_streams: bool | None = None
    dark_mode: bool | None = None
    debug_mode: bool | None = None
    proxy: str | None = None
    connection_quality: int | None = None


# ==================== REST API Endpoints ====================


@app.get("/", response_class=HTMLResponse)
async def serve_index():
    """Serve the main web interface"""
    return FileResponse(INDEX_FILE)


@app.get("/api/status")
async def get_status():
    """Get current application status"""
    gui, client = _require()
    return {
        "status": gui.status.get(),
        "state": client.state.name.lower(),
        "syncing": gui.status.syncing,
        "credentials": gui.setup.get_status(),
    }


@app.get("/api/channels")
async def get_channels():
    """Get list of tracked channels"""
    gui, _ = _require()
    return {"channels": gui.channels.get_channels()}


@app.post("/api/channels")
async def add_channel(request: ChannelAddRequest):
    """Start tracking a channel"""
    gui, client = _require()
    identifier = canonical_name(request.name)
    if not identifier:
        raise HTTPException(status_code=400, detail="Channel name is empty")
    if not client.add_channel(identifier):
        return {"success": False, "message": f"{identifier} is already in the config"}
    gui.channel_added(identifier)
    return {"success": True, "id": identifier}


@app.delete("/api/channels/{name}")
async def remove_channel(name: str):
    """Stop tracking a channel"""
    _, client = _require()
    if not await client.remove_channel(name):
        raise HTTPException(status_code=404, detail="Channel not found")
    return {"success": True}


@app.post("/api/channels/{name}/open")
async def open_channel(name: str):
    """Open a channel's stream page in the browser"""
    _, client = _require()
    if name not in client.channel_set:
        raise HTTPException(status_code=404, detail="Channel not found")
    return {"success": True, "url": client.open_stream(name)}


@app.post("/api/refresh")
async def trigger_refresh():
    """Run a pass right away"""
    _, client = _require()
    if not client.scheduler.running:
        return {"success": False, "message": "Client credentials are required"}
    client.run_pass_now()
    return {"success": True}


@app.get("/api/console")
async def get_console_history():
    """Get console output history"""
    gui, _ = _require()
    return {"lines": gui.output.get_history()}


@app.get("/api/settings")
async def get_settings():
    """Get current settings"""
    gui, _ = _require()
    return gui.settings.get_settings()


@app.post("/api/settings")
async def update_settings(settings: SettingsUpdate):
    """Update application settings"""
    gui, _ = _require()
    settings_dict = settings.model_dump(exclude_unset=True)
    gui.settings.update_settings(settings_dict)
    if "dark_mode" in settings_dict:
        gui.apply_theme(gui.settings.get_settings()["dark_mode"])
    return {"success": True, "settings": gui.settings.get_settings()}


@app.post("/api/credentials")
async def submit_credentials(credentials: CredentialsRequest):
    """Store the Twitch application credentials and start polling"""
    gui, client = _require()
    if not credentials.client_id.strip() or not credentials.client_secret.strip():
        raise HTTPException(status_code=400, detail="Both client ID and secret are required")
    client.save_credentials(credentials.client_id, credentials.client_secret)
    gui.print("Client credentials saved")
    return {"success": True, "credentials": gui.setup.get_status()}


@app.get("/api/version")
async def get_version():
    """Get current application version and the result of the last update check"""
    _, client = _require()
    return client.update_checker.info()


@app.post("/api/close")
async def trigger_close():
    """Trigger application shutdown"""
    _, client = _require()
    client.close()
    return {"success": True}


# ==================== Socket.IO Events ====================


@sio.event
async def connect(sid, environ):
    """Client connected"""
    logger.info(f"Web client connected: {sid}")

    # Send initial state to new client
    if gui_manager and notifier:
        await sio.emit(
            "initial_state",
            {
                "status": gui_manager.status.get(),
                "syncing": gui_manager.status.syncing,
                "channels": gui_manager.channels.get_channels(),
                "console": gui_manager.output.get_history(),
                "notifications": gui_manager.tray.get_recent(),
                "settings": gui_manager.settings.get_settings(),
                "credentials": gui_manager.setup.get_status(),
                "version": notifier.update_checker.info(),
            },
            room=sid,
        )


@sio.event
async def disconnect(sid):
    """Client disconnected"""
    logger.info(f"Web client disconnected: {sid}")


@sio.event
async def request_refresh(sid):
    """Client requested a pass"""
    if notifier:
        notifier.run_pass_now()


async def run_server(host: str = "0.0.0.0", port: int = 8080):
    """Run the web server until shutdown_server is called"""
    global _server_instance
    import uvicorn

    config = uvicorn.Config(socket_app, host=host, port=port, log_level="info", access_log=False)
    server = uvicorn.Server(config)
    _server_instance = server
    try:
        await server.serve()
    finally:
        _server_instance = None


async def shutdown_server():
    """Gracefully shutdown the web server"""
    if _server_instance:
        logger.info("Setting server.should_exit = True")
        _server_instance.should_exit = True
        # uvicorn checks should_exit periodically
        await asyncio.sleep(0.1)
