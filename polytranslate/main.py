"""
/**
 * @file polytranslate/main.py
 * @description FastAPI 应用入口（MVC：仅装配路由、中间件与异常处理）。
 */
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from polytranslate.config import load_settings, reload_settings, CONFIG_PATH, CONFIG_LOCAL_PATH

from polytranslate.controllers import backends_router, health_router, translate_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="polytranslate")


class ConfigEventHandler(FileSystemEventHandler):
    """Handler for config file changes"""
    def on_modified(self, event):
        if event.is_directory:
            return
        if event.src_path in (CONFIG_PATH, CONFIG_LOCAL_PATH):
            reload_settings()


_observer = None


@app.on_event("startup")
async def startup_event():
    global _observer
    load_settings()
    try:
        event_handler = ConfigEventHandler()
        _observer = Observer()
        config_dir = os.path.dirname(CONFIG_PATH)
        _observer.schedule(event_handler, config_dir, recursive=False)
        _observer.start()
        logger.info(f"Config watcher started on {config_dir}")
    except Exception as e:
        _observer = None
        logger.warning(f"Failed to start config watcher: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    global _observer
    if _observer:
        _observer.stop()
        _observer.join()
        _observer = None


def available_routes():
    # Read from the OpenAPI schema so routes of included routers are listed.
    routes = []
    for path, operations in app.openapi().get("paths", {}).items():
        for method in sorted(operations):
            routes.append(f"{method.upper()} {path}")
    return routes


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"error": f"Route {request.method} {request.url.path} not found", "routes": available_routes()},
        )
    detail = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": f"Malformed request body: {message}"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(backends_router)
app.include_router(translate_router)


if __name__ == "__main__":
    import uvicorn

    server = load_settings().server
    uvicorn.run(app, host=server["host"], port=server["port"])
