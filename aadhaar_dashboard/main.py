"""
FastAPI application entry point.

Aadhaar Analytics Dashboard - in-memory analytics over uploaded UIDAI
enrollment, demographic update and biometric update extracts.
"""
import logging
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aadhaar_dashboard.config import settings
from aadhaar_dashboard.routers import (
    records,
    aggregates,
    anomaly,
    forecasting,
    insights,
)
from aadhaar_dashboard.schemas.common import HealthResponse
from aadhaar_dashboard.store import RecordStore, get_store

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    **Aadhaar Analytics Dashboard API**

    Upload enrollment, demographic update and biometric update CSV extracts
    and explore them. Records live in memory for the lifetime of the process;
    every view is recomputed from the current records on request.

    ## Key Features

    * **Uploads**: Multi-file CSV upload per vertical, additive
    * **Aggregates**: State, district and pincode rollups, monthly and daily trends
    * **Anomaly Detection**: Z-score outliers per state/district series
    * **Forecasting**: Six-month seasonal linear forecast
    * **Insights**: Event reasons, dashboard insights and a question-answering assistant
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers with prefixes
app.include_router(
    records.router,
    prefix=f"{settings.API_V1_PREFIX}/records",
    tags=["Records"]
)
app.include_router(
    aggregates.router,
    prefix=f"{settings.API_V1_PREFIX}/aggregates",
    tags=["Aggregates"]
)
app.include_router(
    anomaly.router,
    prefix=f"{settings.API_V1_PREFIX}/anomaly",
    tags=["Anomaly Detection"]
)
app.include_router(
    forecasting.router,
    prefix=f"{settings.API_V1_PREFIX}/forecast",
    tags=["Forecasting"]
)
app.include_router(
    insights.router,
    prefix=f"{settings.API_V1_PREFIX}/insights",
    tags=["Insights"]
)


# Root endpoint
@app.get("/", tags=["Root"])
def root():
    """API root endpoint with basic information."""
    return {
        "message": "Aadhaar Analytics Dashboard API",
        "version": settings.VERSION,
        "description": "In-memory analytics for Aadhaar enrollment and update data",
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "records": f"{settings.API_V1_PREFIX}/records",
            "aggregates": f"{settings.API_V1_PREFIX}/aggregates",
            "anomaly": f"{settings.API_V1_PREFIX}/anomaly",
            "forecast": f"{settings.API_V1_PREFIX}/forecast",
            "insights": f"{settings.API_V1_PREFIX}/insights",
        }
    }


# Health check
@app.get(f"{settings.API_V1_PREFIX}/health", tags=["Health"], response_model=HealthResponse)
def health_check(store: RecordStore = Depends(get_store)):
    """Health check endpoint with loaded record counts."""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "records": store.snapshot().counts(),
    }


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "status_code": 500
        }
    )
