from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from purchase_tool import __version__
from purchase_tool.config import configure_logging, get_settings
from purchase_tool.api.purchase_api import router as purchase_router
from purchase_tool.api.state import close_gateway

configure_logging(get_settings().log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_gateway()


app = FastAPI(
    title="Purchase Tool API",
    description="Package lookup and purchase pricing against the Emerald catalog",
    version=__version__,
    lifespan=lifespan,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(purchase_router)


@app.get("/")
async def root():
    return {"status": "online", "message": "Purchase Tool API Active"}


@app.get("/system/status")
async def get_status():
    settings = get_settings()
    return {
        "catalog_configured": bool(settings.catalog_url),
        "connect_timeout": settings.connect_timeout,
        "request_timeout": settings.request_timeout,
        "require_state": settings.require_state,
    }
