"""Main FastAPI application"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from catalog.config import settings
from catalog.database import init_db, SessionLocal
from catalog.api import albums
from catalog.seed import seed_catalog

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for startup and shutdown"""
    # Startup
    logger.info("Starting Album Catalog API...")

    init_db()
    logger.info("Database initialized")

    if settings.database_seed:
        db = SessionLocal()
        try:
            seed_catalog(db)
        except Exception as e:
            logger.error(f"Failed to seed catalog: {e}")
        finally:
            db.close()

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Album Catalog API",
    description="Search and maintain a catalog of music albums",
    version="0.1.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["ETag", "Location"],
)

# Register routers
app.include_router(albums.router)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Album Catalog API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "catalog.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
