from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import HTTPException
from dotenv import load_dotenv
import logging
import time
import uvicorn

from tripdiary.core.logging import setup_logging
from tripdiary.core.settings import get_settings

# Load environment variables from .env file
load_dotenv()

settings = get_settings()

# Setup logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

from tripdiary.api.v1 import routes, trips  # noqa: E402

app = FastAPI(title="Trip Diary API", version="0.1.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests_middleware(request: Request, call_next):
    """Log incoming requests and their processing time."""
    start_time = time.time()
    method = request.method
    path = request.url.path

    logger.info(f"Request: {method} {path}")

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"Error: {method} {path} - Exception: {str(e)} - Duration: {process_time:.4f}s",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal Server Error. Please check logs for more details."},
        )

    process_time = time.time() - start_time
    logger.info(
        f"Response: {method} {path} - Status: {response.status_code} - Duration: {process_time:.4f}s"
    )
    return response


# Include routers
app.include_router(routes.router, prefix="/api/v1/routes", tags=["routes"])
app.include_router(trips.router, prefix="/api/v1/trips", tags=["trips"])


@app.get("/health", tags=["General"])
async def health():
    return {
        "status": "ok",
        "version": app.version,
        "distance_provider": settings.DISTANCE_PROVIDER,
        "environment": settings.ENVIRONMENT,
    }


@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


def run():
    logger.info(f"Starting server on {settings.HOST}:{settings.PORT}, environment: {settings.ENVIRONMENT}")
    uvicorn.run(
        "tripdiary.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    run()
