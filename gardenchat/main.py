from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gardenchat.core.config import settings
from gardenchat.sqlite.database import Base, engine, init_db
from gardenchat.utils.logging import get_logger, setup_logging

from gardenchat.api.errors import register_error_handlers
from gardenchat.api.parse_question import router as parse_question_router
from gardenchat.api.query_builder import router as query_builder_router
from gardenchat.api.search_tips import router as search_tips_router
from gardenchat.api.chat import router as chat_router
from gardenchat.api.health import router as health_router

logger = get_logger("gardenchat.main")

app = FastAPI(
    title=settings.app_name,
    description="Gardenchat Backend API - plant questions answered from the plant and tip databases",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your frontend domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(parse_question_router, prefix="/api/v1")   # /api/v1/parse-question
app.include_router(query_builder_router, prefix="/api/v1")    # /api/v1/query-builder
app.include_router(search_tips_router, prefix="/api/v1")      # /api/v1/search-tips
app.include_router(chat_router, prefix="/api/v1")             # /api/v1/chat
app.include_router(health_router, prefix="/api")              # /api/health


@app.on_event("startup")
async def on_startup():
    """
    Startup:
    1. Configure logging
    2. Check the database connection
    3. Create tables (if they don't exist)
    """
    setup_logging()
    logger.info("Starting Gardenchat Backend...")

    logger.info("Initializing database...")
    if not init_db():
        logger.error("Failed to initialize database connection")
        raise RuntimeError("Database initialization failed")

    logger.info("Creating database tables...")
    try:
        # Import models to register them with Base
        from gardenchat.sqlite import models  # noqa: F401
        Base.metadata.create_all(bind=engine)
        logger.info("[OK] Database tables ready")
    except Exception as e:
        logger.error("Error creating tables: %s", e)
        raise

    logger.info("[OK] Gardenchat Backend started")


@app.get("/")
async def root():
    return {"service": settings.app_name, "docs": "/docs", "health": "/api/health"}
