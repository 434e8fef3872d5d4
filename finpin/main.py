"""
FastAPI Application Entry Point.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router
from .config import get_settings
from .models.store import build_demo_trip, trip_store


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Finpin",
    description="Trip budgeting with AI cost estimates and budget advice",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)

if settings.seed_demo_trip and not trip_store.list_trips():
    demo = trip_store.add(build_demo_trip())
    logger.info(f"Seeded demo trip {demo.name!r}")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "model": settings.gemini_model
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "finpin.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
