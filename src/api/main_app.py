"""Main FastAPI application for the API layer."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.config import AppConfig
from src.api.application.alert_rule_service import AlertRuleService
from src.api.infrastructure.container import init_container
from src.api.infrastructure.logging import configure_structured_logging
from src.api.routers import alert_rules

config = AppConfig()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    configure_structured_logging(config.logging)
    logger.info("🚀 Starting alert rule API...")

    # Initialize API container
    api_config = {
        "database": {
            "url": config.database.url,
            "async_url": config.database.async_url,
            "pool_size": config.database.pool_size,
            "max_overflow": config.database.max_overflow,
        },
    }
    container = init_container(api_config)

    # Create database tables (for development)
    db = container.database()
    db.create_all()
    logger.info("✓ Database initialized")

    # Warm the registry from the store; it is kept current by the write paths afterwards
    service = AlertRuleService(registry=container.rule_registry())
    async with db.get_async_session() as session:
        loaded = await service.load_registry(session)
    logger.info(f"✓ Registry warmed with {loaded} alert rules")
    logger.info("✓ API ready")

    yield

    # Shutdown
    logger.info("🛑 Shutting down API...")
    await db.close()


# Create FastAPI app
app = FastAPI(
    title="Alert Rule API",
    description="API for managing alert rule definitions",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(alert_rules.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.server.host, port=config.server.port)
