"""
Hand Cricket - human vs. computer hand cricket API
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from handcricket import __version__
from handcricket.config import settings
from handcricket.database import init_db
from handcricket.api.game import router as game_router, get_game
from handcricket.api.stats import router as stats_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="Hand Cricket",
    description="Hand cricket against an adaptive computer opponent",
    version=__version__,
)

# CORS origins - configurable via environment variable
default_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

# Add custom origins from environment (comma-separated)
if settings.CORS_ORIGINS:
    default_origins.extend([o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()])

app.add_middleware(
    CORSMiddleware,
    allow_origins=default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(game_router, prefix="/api")
app.include_router(stats_router, prefix="/api")


@app.on_event("startup")
def startup_event():
    """Create tables and load career stats once"""
    init_db()
    get_game()


@app.get("/")
def root():
    """Health check endpoint"""
    return {
        "name": "Hand Cricket API",
        "version": __version__,
        "status": "running",
    }


@app.get("/api/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
