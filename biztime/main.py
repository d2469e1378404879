from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from biztime.core.config import settings
from biztime.core.db import check_connection, init_db
from biztime.core.error_handlers import register_error_handlers

# Routers
from biztime.routes import companies, industries, invoices

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="BizTime API",
    version="1.0.0",
)

# ==========================
# CORS
# ==========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# ==========================
# Startup Event
# ==========================
@app.on_event("startup")
def startup_event():
    init_db()
    logger.info("✓ Database initialized")
    logger.info("✓ BizTime API is running")


# ==========================
# Routers
# ==========================
app.include_router(companies.router, prefix="/companies", tags=["companies"])
app.include_router(industries.router, prefix="/industries", tags=["industries"])
app.include_router(invoices.router, prefix="/invoices", tags=["invoices"])


# ==========================
# Root + Health
# ==========================
@app.get("/")
def root():
    return {
        "service": "biztime-api",
        "status": "running",
        "endpoints": {
            "companies": "/companies",
            "industries": "/industries",
            "invoices": "/invoices",
            "health": "/health",
        },
    }


@app.get("/health")
def health():
    if not check_connection():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unreachable"},
        )
    return {"status": "ok", "database": "ok"}
