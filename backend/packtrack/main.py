"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from packtrack.api import auth, integrations, shipments
from packtrack.db.database import Base, SessionLocal, engine, settings
from packtrack.services.auth_client import AuthClient
from packtrack.services.integration_sync import SyncRegistry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Create database tables
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.auth_client.aclose()


app = FastAPI(
    title="PackTrack API",
    description="Track incoming and outgoing parcels across carriers and marketplaces",
    version="1.0.0",
    lifespan=lifespan
)

app.state.auth_client = AuthClient(settings.supabase_url, settings.supabase_anon_key)
app.state.sync_registry = SyncRegistry(SessionLocal)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(shipments.router, prefix="/api/shipments", tags=["shipments"])
app.include_router(integrations.router, prefix="/api/integrations", tags=["integrations"])
app.include_router(auth.router, prefix="/auth", tags=["auth"])


@app.get("/")
async def root():
    return {"message": "PackTrack API"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
