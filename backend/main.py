"""
OpenSCAD Format Backend - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, formatter
from services.config_manager import ConfigManager
from services.format_service import get_format_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    # Startup: Initialize singleton services
    print("[Backend] Starting OpenSCAD Format Backend...")
    config_manager = ConfigManager.get_instance()
    print(f"[Backend] ConfigManager initialized ({config_manager.config_file})")

    format_service = get_format_service(config_manager)
    print(f"[Backend] FormatService initialized for {config_manager.get('languages')}")

    yield
    # Shutdown: Cancel whatever is still running
    print("[Backend] Shutting down OpenSCAD Format Backend...")
    await format_service.cancel_all()


app = FastAPI(
    title="OpenSCAD Format Backend",
    description="Formats OpenSCAD documents with openscad-format and returns editor text edits",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for editor plugin communication
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Editor plugin runs locally
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(formatter.router, prefix="/api/format", tags=["format"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "openscad-format-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "127.0.0.1"), port=server.get("port", 8000))
