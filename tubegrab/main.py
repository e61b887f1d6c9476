import asyncio
import uuid
from contextlib import suppress
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from tubegrab.api import download, health, info, ui
from tubegrab.config.settings import config
from tubegrab.core.errors import TubegrabError
from tubegrab.core.logging import log_warning, setup_logging
from tubegrab.i18n import i18n
from tubegrab.services.bootstrap import initialize_extractor
from tubegrab.utils.locale import get_locale

app = FastAPI(
    title=config.api.title,
    description=config.api.description,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    redoc_url=None
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "Content-Length"],
)


@app.middleware("http")
async def assign_request_id(request: Request, call_next):
    request.state.request_id = uuid.uuid4().hex[:8]
    return await call_next(request)


@app.exception_handler(TubegrabError)
async def tubegrab_error_handler(request: Request, exc: TubegrabError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    locale = get_locale(request.headers.get("accept-language"))
    reasons = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ())[1:])}: {error.get('msg')}"
        for error in exc.errors()
    )
    url_rejected = any(tuple(error.get("loc", ()))[-1:] == ("url",) for error in exc.errors())
    key = "error.invalid_url" if url_rejected else "error.invalid_request"
    log_warning(request, f"Rejected request: {reasons}")
    return JSONResponse(
        status_code=400,
        content={"error": i18n.get(key, locale=locale), "details": reasons}
    )


# Routes
app.include_router(ui.router, tags=["UI"])
app.include_router(health.router, tags=["Health"])
app.include_router(info.router, tags=["Info"])
app.include_router(download.router, tags=["Download"])
app.mount("/static", StaticFiles(directory=ui.STATIC_DIR), name="static")


@app.on_event("startup")
async def startup_event():
    setup_logging(config.logging)
    # Serve immediately; requests get 503 until yt-dlp is located
    app.state.extractor_task = asyncio.create_task(initialize_extractor())


@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "extractor_task", None)
    if task is not None and not task.done():
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
