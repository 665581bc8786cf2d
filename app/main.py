# app/main.py
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from app.api.error_handlers import register_exception_handlers
from app.api.routers import categories
from app.core.config import settings
from app.core.logging import setup_logging
from app.core.metrics import export_metrics
from app.middleware import ObservabilityMiddleware

# --- Models registration ---
import app.models.user      # noqa: F401
import app.models.category  # noqa: F401

setup_logging()

TAGS_METADATA = [
    {"name": "categories", "description": "Alta, consulta, edición y baja de categorías."},
]

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    description=(
        "API de categorías con respuestas localizadas.\n\n"
        "- El idioma se elige con `?lang=`, la cabecera `x-lang` o `Accept-Language`.\n"
        "- Todos los endpoints requieren un access token (Bearer).\n"
    ),
    openapi_tags=TAGS_METADATA,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    swagger_ui_parameters={
        "persistAuthorization": True,
        "displayRequestDuration": True,
    },
)

# --- Middlewares ---
app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- Routers ---
app.include_router(categories.router, prefix=settings.API_V1_STR)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        tags=TAGS_METADATA,
    )

    comps = openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})
    comps["BearerAuth"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
        "description": "Access token. Formato: `Bearer <token>`",
    }
    openapi_schema["security"] = [{"BearerAuth": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.get("/", include_in_schema=False)
def root():
    return {"status": "ok", "docs_url": "/docs", "redoc_url": "/redoc"}


@app.get("/metrics", include_in_schema=False)
def metrics():
    body, content_type = export_metrics()
    return Response(content=body, media_type=content_type)
