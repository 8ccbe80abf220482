"""Sikkerhetsheaders for portfolio-API-et."""

import os
from fastapi import FastAPI, Request
from fastapi.responses import Response


# GraphiQL loads its bundle from a CDN and runs inline scripts
DEFAULT_CSP = (
    "default-src 'self'; "
    "img-src 'self' data: https:; "
    "font-src 'self' data: https:; "
    "script-src 'self' 'unsafe-inline' https://unpkg.com; "
    "style-src 'self' 'unsafe-inline' https://unpkg.com; "
    "connect-src 'self'"
)

BASE_HEADERS = {
    "Content-Security-Policy": DEFAULT_CSP,
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


def setup_security_headers(app: FastAPI) -> None:
    """Legg til CSP, anti-clickjacking, nosniff og (i produksjon) HSTS."""
    production = os.getenv("ENVIRONMENT", "development") == "production"

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in BASE_HEADERS.items():
            response.headers.setdefault(name, value)
        if production:
            response.headers.setdefault("Strict-Transport-Security", HSTS_VALUE)
        # API-svar skal ikke caches, opplastede filer kan caches
        if not request.url.path.startswith("/uploads/"):
            response.headers.setdefault(
                "Cache-Control",
                "no-cache, no-store, must-revalidate",
            )
        return response
