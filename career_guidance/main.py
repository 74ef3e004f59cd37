from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from career_guidance.config.settings import settings
from career_guidance.core.errors import register_exception_handlers
from career_guidance.core.logging import configure_logging, log_requests_middleware
from career_guidance.routes import api_router, health

configure_logging()

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Career guidance for students: assessments, career paths and AI-assisted planning",
    version=settings.VERSION,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests_middleware)

register_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix=settings.API_V1_STR)
app.include_router(health.router, prefix="/health", tags=["health"])


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.PROJECT_NAME}...")
    from career_guidance.config.database import init_db
    await init_db()

    # Builds the model client (or logs that fallbacks are in use)
    from career_guidance.core.deps import get_ai_service
    get_ai_service()

    logger.info(f"{settings.PROJECT_NAME} started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.PROJECT_NAME}...")
    from career_guidance.config.database import close_db
    await close_db()

    from career_guidance.core.deps import get_cache
    await get_cache().close()
    logger.info(f"{settings.PROJECT_NAME} shut down successfully")
