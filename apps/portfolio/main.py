"""
Portfolio API

GraphQL API for the portfolio site and its admin panel, plus REST endpoints
for image uploads and static serving of uploaded files.

Run with: uvicorn apps.portfolio.main:app
"""
import logging
import os

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from strawberry.fastapi import GraphQLRouter

from apps.auth.context import get_context
from apps.portfolio.schema import schema
from apps.shared.cors import setup_cors
from apps.shared.database import Base, check_db_connection, engine
from apps.shared.errors import PortfolioError
from apps.shared.security_headers import setup_security_headers
from apps.shared.validators import validation_message
from apps.uploads.main import router as uploads_router
from apps.uploads.storage import UPLOAD_DIR

logger = logging.getLogger("portfolio-service")
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Create database tables (all models are registered by the schema import)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Portfolio API",
    version="1.0.0",
    description="Portfolio content management: GraphQL API and image uploads",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

setup_cors(app)
setup_security_headers(app)


def error_response(message: str, category: str, status_code: int) -> JSONResponse:
    """Consistent error payloads across the API."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "category": category,
        },
    )


@app.exception_handler(PortfolioError)
async def portfolio_exception_handler(request: Request, exc: PortfolioError):
    logger.info("%s on %s: %s", exc.code, request.url.path, exc.message)
    return error_response(
        message=exc.message,
        category=exc.category,
        status_code=exc.status_code,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(
        message=validation_message(exc),
        category="client_error",
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s", request.url.path)
    return error_response(
        message="A database error occurred while processing the request.",
        category="database",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    detail = exc.detail
    message = (
        detail.get("message") if isinstance(detail, dict) else str(detail)
    ) or "Request failed."

    if exc.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
        category = "security"
    elif exc.status_code >= 500:
        category = "server_error"
    else:
        category = "client_error"

    return error_response(
        message=message,
        category=category,
        status_code=exc.status_code,
    )


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s", request.url.path, exc_info=exc)
    return error_response(
        message="An unexpected server error occurred. Please try again later.",
        category="server_error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@app.get("/health")
def health():
    """Health check endpoint - returns service status and database connectivity"""
    db_connected = check_db_connection()
    return {
        "status": "ok" if db_connected else "degraded",
        "service": "portfolio",
        "database": "connected" if db_connected else "disconnected",
    }


graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if ENVIRONMENT != "production" else None,
)
app.include_router(graphql_router, prefix="/graphql")
app.include_router(uploads_router)

# Serve locally stored uploads
os.makedirs(UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR, check_dir=False), name="uploads")
