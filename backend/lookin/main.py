import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from lookin import __version__
from lookin.config import get_settings
from lookin.db_init import init_database
from lookin.logging_config import configure_logging
from lookin.api import (
    auth,
    catalog,
    profiles,
    find,
    listings,
    conversations,
    uploads,
    safety,
    websocket,
)

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Flatmate matching: profiles, room listings and messaging",
    version=__version__
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add custom exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log and handle validation errors with detailed information."""
    body_bytes = await request.body()
    try:
        body_text = body_bytes.decode("utf-8")
    except UnicodeDecodeError:
        body_text = str(body_bytes)

    errors = exc.errors()
    logger.error(f"Validation error on {request.method} {request.url.path}")
    logger.debug(f"Request body: {body_text}")
    logger.error(f"Validation errors: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(errors)}
    )

# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(catalog.router, prefix="/api")
app.include_router(profiles.router, prefix="/api")
app.include_router(find.router, prefix="/api")
app.include_router(listings.router, prefix="/api")
app.include_router(conversations.router, prefix="/api")
app.include_router(uploads.router, prefix="/api")
app.include_router(safety.router, prefix="/api")
app.include_router(websocket.router)


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    logger.info(f"Starting {settings.APP_NAME} {__version__}")
    init_database()
    logger.info("API docs available at /docs")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": __version__,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "lookin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
