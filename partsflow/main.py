from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from partsflow.core.config import Settings, settings
from partsflow.core.observability import (
    http_exception_handler,
    log_event,
    request_logging_middleware,
    setup_observability,
    unhandled_exception_handler,
    validation_exception_handler,
)
from partsflow.routers import categories, dashboard, movements, parts, reports, suppliers
from partsflow.services.seed_service import seed_sample_data
from partsflow.storage import build_storage
from partsflow.storage.base import Storage

API_PREFIX = "/api"


def _configure_cors(app: FastAPI, app_settings: Settings) -> None:
    cors_origins = app_settings.cors_origins or ["http://localhost:5173"]
    allow_all_origins = "*" in cors_origins
    env_value = app_settings.env.lower().strip()
    allow_origin_regex = app_settings.cors_origin_regex

    if (
        not allow_origin_regex
        and env_value in {"dev", "development", "staging", "stage"}
    ):
        # Dev servers pick dynamic localhost ports.
        allow_origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all_origins else cors_origins,
        allow_origin_regex=allow_origin_regex,
        allow_credentials=not allow_all_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app(storage: Storage | None = None, app_settings: Settings = settings) -> FastAPI:
    """Build the API around ``storage``, or the configured backend when omitted."""
    app = FastAPI(
        title=app_settings.app_name,
        version="0.1.0",
        description=(
            "Inventory ledger for spare parts: catalogue, suppliers, categories, "
            "stock movements, KPIs and report records.\n\n"
            "All resource endpoints live under `/api`. Errors share one envelope: "
            "`{\"error\": {code, message, request_id, path, details}}`."
        ),
        swagger_ui_parameters={
            "displayRequestDuration": True,
            "defaultModelsExpandDepth": 1,
        },
        openapi_tags=[
            {"name": "health", "description": "Service status and quick links."},
            {"name": "parts", "description": "Parts catalogue, search and low-stock listing."},
            {"name": "suppliers", "description": "Supplier directory."},
            {"name": "categories", "description": "Part categories."},
            {"name": "movements", "description": "Stock movements and their effect on quantities."},
            {"name": "dashboard", "description": "Inventory KPIs."},
            {"name": "reports", "description": "Records of generated reports."},
        ],
    )

    setup_observability(app_settings.log_level)
    app.middleware("http")(request_logging_middleware)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    _configure_cors(app, app_settings)

    if storage is None:
        storage = build_storage(app_settings)
        if app_settings.seed_sample_data:
            seed_sample_data(storage)
    app.state.storage = storage
    log_event("startup", storage_backend=storage.name)

    for module in (parts, suppliers, categories, movements, dashboard, reports):
        app.include_router(module.router, prefix=API_PREFIX)

    @app.get("/", tags=["health"])
    def root():
        return {
            "app": app_settings.app_name,
            "docs": "/docs",
            "redoc": "/redoc",
            "health": "/health",
            "ready": "/ready",
        }

    @app.get("/health", tags=["health"])
    def health():
        return {"ok": True}

    @app.get("/ready", tags=["health"])
    def ready():
        try:
            app.state.storage.get_inventory_stats()
        except Exception:
            return {"ok": False}
        return {"ok": True, "storage": app.state.storage.name}

    return app


app = create_app()
