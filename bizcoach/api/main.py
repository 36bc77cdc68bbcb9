import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bizcoach.api.models import ErrorResponse
from bizcoach.api.routes.action_items import router as action_items_router
from bizcoach.api.routes.action_lists import router as action_lists_router
from bizcoach.api.routes.ai import router as ai_router
from bizcoach.api.routes.business_plans import router as business_plans_router
from bizcoach.api.routes.chat import router as chat_router
from bizcoach.api.routes.conversations import router as conversations_router
from bizcoach.api.routes.notes import router as notes_router
from bizcoach.config import settings
from bizcoach.errors import CoachError
from bizcoach.llm.rate_limit import RateLimiter

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Business Coach API",
    description="Action items, conversations and AI-assisted business planning",
    version="0.1.0",
)

# One limiter per process: every outbound LLM call goes through it.
app.state.rate_limiter = RateLimiter(settings.llm_min_interval_seconds)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(CoachError)
async def coach_error_handler(request: Request, exc: CoachError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _error(400, "Invalid request data", details)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error", str(exc))


app.include_router(action_items_router)
app.include_router(action_lists_router)
app.include_router(conversations_router)
app.include_router(chat_router)
app.include_router(ai_router)
app.include_router(business_plans_router)
app.include_router(notes_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
