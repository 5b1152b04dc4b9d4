"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from contextlib import asynccontextmanager
import logging

from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from .config import settings
from .database import Base, SessionLocal, engine, get_db
# Import all models so the tables are registered before create_all
from .clinics import models as clinic_models  # noqa: F401
from .users import models as user_models  # noqa: F401
from .auth import models as auth_models  # noqa: F401
from .auth.router import router as auth_router
from .clinics.router import router as clinics_router
from .users.router import router as users_router
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .core.bootstrap import bootstrap_clinic_if_needed

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting Clinic API...")
    # Create database tables if they don't exist
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        bootstrap_clinic_if_needed(db, settings)
    finally:
        db.close()
    yield


# Create FastAPI application
app = FastAPI(
    title="Clinic API",
    description="Multi-tenant clinic management API",
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router)
app.include_router(clinics_router)
app.include_router(users_router)


# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": "Welcome to Clinic API", "version": app.version}


# Health check endpoint
@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    db.execute(text("SELECT 1"))
    return {"status": "healthy", "database": "connected"}
