# Standard library
import json
import time
import uuid
from contextlib import asynccontextmanager

# Third party
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from yaml import dump

# Local imports
from employee_console.core.config import settings
from employee_console.core.exceptions import ConsoleError
from employee_console.core.logging import get_logger
import employee_console.api as api


logger = get_logger(__name__)

SENSITIVE_HEADERS = ["authorization", "cookie"]
# Upload bodies carry whole images as base64
BODY_LOG_LIMIT = 2000


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application startup and shutdown events"""
    # Startup
    logger.info("🚀 Employee console API starting up...")

    # Test database connection
    try:
        from employee_console.db.base import get_db_session

        session_gen = get_db_session()
        session = next(session_gen)
        session.execute(text("SELECT 1")).fetchone()
        session.close()
        logger.info("✅ Database connection successful")
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        raise

    yield  # This is where FastAPI serves the application

    # Shutdown
    logger.info("🛑 Employee console API shutting down...")


def _clean_errors(errors):
    """Drop the non-serializable ctx objects pydantic attaches to errors"""
    cleaned = []
    for error in errors:
        if not isinstance(error, dict):
            cleaned.append({"msg": str(error)})
            continue
        clean_error = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg")
        }
        if isinstance(error.get("ctx"), dict) and "error" in error["ctx"]:
            clean_error["ctx"] = {"error": str(error["ctx"]["error"])}
        cleaned.append(clean_error)
    return cleaned


def _first_message(errors) -> str:
    if not errors:
        return "Validation error"
    message = errors[0].get("msg") or "Validation error"
    # pydantic prefixes errors raised from validators
    return message.replace("Value error, ", "", 1)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Employee Console",
        description="Back office API for category management, vendor onboarding and sales statistics.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        default_response_class=JSONResponse,
    )

    # Mount employee APIs, each router carries its own session auth
    for name, router in api.employee_routers:
        app.include_router(router, prefix="/api/employee", tags=[f"employee-{name}"])

    # Mount public APIs
    for name, router in api.public_routers:
        if name == "health":
            app.include_router(router, prefix="")
        else:
            app.include_router(router, prefix="/api", tags=[name])

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request/response logging with a per-request id
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = str(uuid.uuid4())
        logger.info(f"[{request_id}] {request.method} {request.url}")

        headers = dict(request.headers)
        for header in SENSITIVE_HEADERS:
            if header in headers:
                headers[header] = "[REDACTED]"
        logger.debug(f"[{request_id}] Headers: {headers}")
        logger.debug(f"[{request_id}] Query Params: {dict(request.query_params)}")

        if settings.DEBUG and request.method in ["POST", "PUT", "PATCH"]:
            try:
                body = await request.body()
                if body:
                    logger.debug(f"[{request_id}] Request Body: {body[:BODY_LOG_LIMIT].decode(errors='replace')}")
            except Exception as e:
                logger.warning(f"[{request_id}] Could not read request body: {e}")

        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"[{request_id}] Request failed after {process_time:.4f}s: {str(e)}",
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        log = logger.warning if response.status_code >= 400 else logger.info
        log(f"[{request_id}] {response.status_code} in {process_time:.4f}s")
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)
        return response

    # OpenAPI specification endpoints
    @app.get("/openapi.yaml", include_in_schema=False)
    async def get_openapi_yaml():
        """Serve OpenAPI specification in YAML format"""
        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        yaml_content = dump(openapi_schema, default_flow_style=False, sort_keys=False)
        return Response(content=yaml_content, media_type="application/x-yaml")

    # Domain errors carry their own status code
    @app.exception_handler(ConsoleError)
    async def console_error_handler(request: Request, exc: ConsoleError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        message = str(getattr(exc, "orig", None) or exc)
        logger.error(f"Database error on {request.method} {request.url.path}: {message}", exc_info=True)
        return JSONResponse(status_code=500, content={"success": False, "error": message})

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500, content={"success": False, "error": "Internal server error"}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = _clean_errors(exc.errors())
        logger.warning(f"Validation error on {request.url.path}: {json.dumps(errors, default=str)}")
        return JSONResponse(
            status_code=422,
            content={"success": False, "error": _first_message(errors), "errors": errors},
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
        errors = _clean_errors(exc.errors())
        logger.warning(f"Pydantic validation error: {json.dumps(errors, default=str)}")
        return JSONResponse(
            status_code=422,
            content={"success": False, "error": _first_message(errors), "errors": errors},
        )

    return app


# Create the app instance
app = create_app()
