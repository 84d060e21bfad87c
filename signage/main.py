import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from signage.api import content, display, playlist, schedule, settings
from signage.config import API_KEY, LOG_LEVEL, QUIET_ACCESS_LOG, QUIET_WEBSOCKET_LOG, SCHEDULE_TIMEZONE
from signage.db import init_db
from signage.scheduling.errors import SchedulingError
from signage.services.errors import InvalidSettingError, NotFoundError
from signage.services.realtime import hub

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("signage")

if QUIET_ACCESS_LOG:
    # Keep warning/error lines, suppress normal access noise (200/201 etc).
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

if QUIET_WEBSOCKET_LOG:
    # Displays on flaky networks reconnect on their own; transport tracebacks are noise.
    logging.getLogger("websockets").setLevel(logging.CRITICAL)
    logging.getLogger("uvicorn.protocols.websockets").setLevel(logging.CRITICAL)

app = FastAPI(title="signage-scheduler")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError):
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


@app.exception_handler(InvalidSettingError)
async def invalid_setting_handler(request: Request, exc: InvalidSettingError):
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


@app.get("/")
def root():
    return {
        "ok": True,
        "service": "signage-scheduler",
        "time_utc": datetime.now(timezone.utc).isoformat(),
        "docs": "/docs",
    }


@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "schedule_timezone": SCHEDULE_TIMEZONE,
        "realtime_clients": hub.client_count,
        "revision": hub.revision,
    }


@app.websocket("/ws/updates")
async def ws_updates(websocket: WebSocket, display_id: str | None = None):
    await hub.connect(websocket, display_id=(display_id or "").strip() or None)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(websocket)
    except Exception:
        logger.debug("Realtime client dropped", exc_info=True)
        await hub.disconnect(websocket)


@app.on_event("startup")
async def startup_events() -> None:
    init_db()
    logger.info("Schedules evaluated in timezone %s", SCHEDULE_TIMEZONE)


@app.middleware("http")
async def api_key_middleware(request: Request, call_next):
    if not API_KEY:
        return await call_next(request)
    path = request.url.path
    if path in {"/", "/healthz"} or path.startswith("/docs") or path.startswith("/openapi.json") or path.startswith("/redoc"):
        return await call_next(request)
    if request.headers.get("X-API-Key") != API_KEY:
        return JSONResponse({"detail": "Unauthorized"}, status_code=401)
    return await call_next(request)


@app.middleware("http")
async def realtime_mutation_middleware(request: Request, call_next):
    response = await call_next(request)
    method = request.method.upper()
    path = request.url.path
    if response.status_code < 400 and method in {"POST", "PUT", "DELETE"}:
        watched_prefixes = ("/playlists", "/schedules", "/displays", "/content", "/settings")
        if path.startswith(watched_prefixes):
            await hub.publish(
                "config_changed",
                {
                    "path": path,
                    "method": method,
                },
            )
    return response

app.include_router(content.router)
app.include_router(display.router)
app.include_router(playlist.router)
app.include_router(schedule.router)
app.include_router(settings.router)
