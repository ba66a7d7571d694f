import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hero_api.api.admin_routes import router as admin_router
from hero_api.api.chat_routes import router as chat_router
from hero_api.config import CORS_ORIGINS, LOG_LEVEL
from hero_api.db.models import Base
from hero_api.db.session import engine
from hero_api.errors import HeroError, NotFoundError, RuntimeUnavailable, ValidationFailed

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Hero Console",
    version="0.1.0",
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(admin_router)
app.include_router(chat_router)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _field_name(loc) -> str:
    # positional parts (e.g. a JSON decode offset) are not field names
    names = [p for p in loc if isinstance(p, str) and p not in _LOCATIONS]
    return ".".join(names) or "body"


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": _field_name(err.get("loc", ())),
            "reason": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"message": "Invalid input", "errors": errors})


@app.exception_handler(HeroError)
async def hero_error(request: Request, exc: HeroError):
    if isinstance(exc, ValidationFailed):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid input", "errors": [e.to_dict() for e in exc.errors]},
        )
    if isinstance(exc, NotFoundError):
        return JSONResponse(status_code=404, content={"message": str(exc)})
    if isinstance(exc, RuntimeUnavailable):
        return JSONResponse(status_code=502, content={"message": str(exc)})

    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.on_event("startup")
def startup():
    retries = 5
    delay = 2

    for attempt in range(retries):
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database connected")
            return
        except OperationalError:
            logger.warning("Waiting for database... (%d/%d)", attempt + 1, retries)
            time.sleep(delay)

    logger.error("Database not ready; requests that touch storage will fail")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
