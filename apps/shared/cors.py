"""Sentralisert CORS-konfigurasjon for portfolio-API-et."""

import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


# Development origins (kun i dev-miljø)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "https://localhost:3000",
]


def get_allowed_origins() -> list[str]:
    """Hent liste over tillatte CORS origins basert på miljø."""
    origins = []

    # Frontend-URL fra env (portfolio-siden og admin-panelet)
    frontend_url = os.getenv("FRONTEND_URL")
    if frontend_url:
        for url in frontend_url.split(","):
            clean_url = url.strip().rstrip("/")
            if clean_url and clean_url not in origins:
                origins.append(clean_url)

    # Legg til dev-origins hvis ikke i produksjon
    env = os.getenv("ENVIRONMENT", "development")
    if env != "production":
        origins.extend(o for o in DEV_ORIGINS if o not in origins)

    return origins


def setup_cors(app: FastAPI) -> None:
    """Legg til CORS-middleware på en FastAPI-app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
