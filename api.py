from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
import uvicorn
import os

from models.schemas import HealthResponse
from routers.split.router import router as split_router
from routers.split.base import get_upstream_url

app = FastAPI(title="PDF Split Proxy")

# Front end may be served from another origin during development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,  # Cache preflight requests for 24 hours
)

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc).isoformat())

# Mount static files - path is relative to the current file
static_dir = os.path.join(os.path.dirname(__file__), "static")
app.mount("/static", StaticFiles(directory=static_dir), name="static")

@app.get("/")
async def read_root():
    """Serve the upload page."""
    return FileResponse(os.path.join(static_dir, "index.html"))

app.include_router(split_router)

@app.on_event("startup")
async def on_startup():
    print(f"🚀 PDF split proxy forwarding to {get_upstream_url()}")

if __name__ == "__main__":
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host=host, port=port)
