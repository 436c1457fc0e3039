from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import require_user
from .auth.models import LoginRequest, SignupRequest
from .auth.users import DuplicateUserError, authenticate, create_user, get_user
from .config import DEFAULT_APP_CONFIG, AppConfig
from .recommendations.data_store import build_store
from .recommendations.models import RecommendationResponse
from .recommendations.ranker import get_recommendations
from .recommendations.store import InteractionStore

logger = logging.getLogger(__name__)

RECOMMENDATION_FAILED = "Failed to get recommendations"

router = APIRouter()


def get_store(request: Request) -> InteractionStore:
    return request.app.state.store


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "message": "Server is running"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@router.post("/api/auth/signup", status_code=201, tags=["Authentication"])
def signup(body: SignupRequest) -> dict:
    try:
        user = create_user(
            body.email,
            body.password,
            body.first_name,
            body.last_name,
            body.phone_number,
        )
    except DuplicateUserError:
        raise HTTPException(status_code=400, detail="Email address is already registered") from None
    return {"success": True, "message": "User created successfully", "user": user}


@router.post("/api/auth/login", tags=["Authentication"])
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"success": True, "message": "Login successful", "user": user}


@router.post("/api/auth/logout", tags=["Authentication"])
def logout(request: Request) -> dict:
    request.session.clear()
    return {"success": True, "message": "Logged out"}


@router.get("/api/auth/profile", tags=["Authentication"])
def profile(user: dict = Depends(require_user)) -> dict:
    return {"success": True, "user": get_user(user["id"]) or user}


# ── Recommendation endpoints ─────────────────────────────────────────────


@router.get(
    "/api/recommendation",
    response_model=RecommendationResponse,
    response_model_exclude_none=True,
    tags=["Recommendations"],
    summary="Get personalized recommendations using collaborative filtering",
)
def recommendation(
    user: dict = Depends(require_user),
    store: InteractionStore = Depends(get_store),
):
    """
    Returns potential friends (users with similar post likes) and recommended
    businesses that those similar users have liked.
    """
    try:
        result = get_recommendations(user["id"], store)
    except Exception:
        logger.error("Recommendation lookup failed for %s", user["id"], exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": RECOMMENDATION_FAILED},
        )
    return RecommendationResponse.model_validate(result.model_dump())


# ── Error envelopes ──────────────────────────────────────────────────────


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        field = errors[0].get("loc", ("body",))[-1]
        message = f"{field}: {errors[0].get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


def create_app(
    store: InteractionStore | None = None,
    config: AppConfig = DEFAULT_APP_CONFIG,
) -> FastAPI:
    """Build the API around *store* (configured store when omitted)."""
    logging.basicConfig(level=config.log_level)

    app = FastAPI(
        title="Luna Backend API",
        version="1.0.0",
        description="Collaborative-filtering recommendations behind session authentication",
        docs_url="/api-docs",
    )
    app.state.store = store if store is not None else build_store(config)

    app.add_middleware(SessionMiddleware, secret_key=config.session_secret)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(router)
    return app


app = create_app()
