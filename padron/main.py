"""
Padrón Biométrico API -- Application entry point.

Run with:
    uvicorn padron.main:app --reload

Then open http://localhost:8000/docs for the interactive Swagger UI.

This file:
  1. Configures logging
  2. Builds the FastAPI application around a store and a matcher
  3. Adds CORS middleware (permissive for demo, locked down in production)
  4. Turns every error into a JSON body with a "message" field
  5. Mounts all route modules and the health check
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from padron import config
from padron.matching import FingerprintMatcher, build_matcher
from padron.routes import auth, biometria, historial, institucion, stats
from padron.routes import padron as registry
from padron.seed import seed_demo_data
from padron.store import DuplicateKeyError, RegistryStore

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Error handlers
#
# Clients always get {"message": ...}. Validation errors add the pydantic
# error list under "errors" and use 400 instead of FastAPI's default 422.
# ---------------------------------------------------------------------------

async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


async def duplicate_key_error(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"message": str(exc), "field": exc.field})


async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(
    store: RegistryStore | None = None,
    matcher: FingerprintMatcher | None = None,
    seed: bool | None = None,
) -> FastAPI:
    """Build the application.

    Without arguments you get the demo: a fresh store seeded with sample
    data and the matcher named by PADRON_MATCHER. Tests pass their own
    store/matcher and usually seed=False."""

    app = FastAPI(
        title="Padrón Biométrico API",
        version=VERSION,
        description=(
            "Demo identity-verification service over a mock electoral registry.\n\n"
            "| Endpoint | Purpose |\n"
            "|----------|--------|\n"
            "| `POST /api/auth/login` | Portal login |\n"
            "| `POST /api/biometria/validar` | Fingerprint validation by CURP |\n"
            "| `POST /api/institucion/verificar-identidad` | Identity lookup by CURP, INE or RFC |\n"
            "| `/api/padron` | Registry CRUD |\n"
            "| `GET /api/historial` | Validation log |\n"
            "| `GET /api/stats` | Aggregate counts |\n\n"
            "**Status:** demo mode -- fingerprint scores are simulated and data "
            "lives in memory only."
        ),
    )

    if store is None:
        store = RegistryStore()
        if seed is None:
            seed = config.SEED_DEMO_DATA
    if seed:
        seed_demo_data(store, config.ADMIN_PASSWORD)

    app.state.store = store
    app.state.matcher = matcher or build_matcher(config.MATCHER)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error)
    app.add_exception_handler(RequestValidationError, validation_error)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_error)
    app.add_exception_handler(Exception, unexpected_error)

    app.include_router(auth.router)
    app.include_router(biometria.router)
    app.include_router(institucion.router)
    app.include_router(registry.router)
    app.include_router(historial.router)
    app.include_router(stats.router)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    @app.get(
        "/api/health",
        summary="Health check",
        description="Returns the current status of the API. Use this for uptime monitoring.",
        tags=["System"],
    )
    async def health(request: Request):
        current = request.app.state.store
        return {
            "status": "healthy",
            "mode": "demo",
            "version": VERSION,
            "matcher": type(request.app.state.matcher).__name__,
            "records_stored": len(current.records),
            "validations_stored": len(current.history),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("padron.main:app", host="0.0.0.0", port=8000)
