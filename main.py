import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from app.api import knowledge, practice, sessions
from app.core.config import get_settings
from app.core.errors import CoachError, MalformedResponseError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="D2D Sales Coach")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CoachError)
async def coach_error_handler(request: Request, exc: CoachError):
    if isinstance(exc, MalformedResponseError):
        logger.error(f"Malformed model output on {request.url.path}: {exc.message}\nRaw: {exc.raw!r}")
    elif exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error."})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    return JSONResponse(status_code=400, content={"error": message})


app.include_router(practice.router)
app.include_router(sessions.router)
app.include_router(knowledge.router)

@app.get("/health")
async def health_check():
    return {"status": "ok"}

if os.path.isdir(settings.public_dir):
    app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
