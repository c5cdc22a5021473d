"""
Office Lunch - FastAPI backend with the deadline scheduler
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from lunch.config import settings
from lunch.database import engine
from lunch.log import configure_logging
from lunch.api import slots, orders, lobby, group_orders, directory
from lunch.services.scheduler import build_scheduler

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Office Lunch API", version="1.0.0")

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = build_scheduler()
        scheduler.start()
    app.state.scheduler = scheduler

    yield

    if scheduler is not None:
        scheduler.stop()
    await engine.dispose()
    logger.info("Shutting down Office Lunch API")


# Create FastAPI application
app = FastAPI(
    title="Office Lunch",
    description="Corporate lunch pre-orders grouped by delivery slot",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    scheduler = getattr(app.state, "scheduler", None)
    return {
        "status": "healthy",
        "service": "api",
        "version": "1.0.0",
        "scheduler": "running" if scheduler is not None and scheduler.running else "stopped",
    }


# Include API routers
app.include_router(directory.buildings_router, prefix="/buildings", tags=["Buildings"])
app.include_router(directory.restaurants_router, prefix="/restaurants", tags=["Restaurants"])
app.include_router(directory.users_router, prefix="/users", tags=["Users"])
app.include_router(slots.router, prefix="/delivery-slots", tags=["Delivery Slots"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])
app.include_router(lobby.router, prefix="/lobby", tags=["Lobby"])
app.include_router(group_orders.router, prefix="/group-orders", tags=["Group Orders"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "lunch.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
