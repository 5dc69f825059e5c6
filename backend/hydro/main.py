import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hydro.config import settings
from hydro.core.exceptions import HydroError
from hydro.core.logging_config import configure_logging
from hydro.middleware.tenant_middleware import TenantMiddleware
from hydro.api.routes import (
    auth,
    corporations,
    users,
    departments,
    municipalities,
    catalogs,
    water_basins,
    discharge_users,
    discharges,
    monitoring_stations,
    monitorings,
    minimum_tariffs,
    project_progress,
    invoices,
)

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TenantMiddleware)


@app.exception_handler(HydroError)
async def hydro_error_handler(request: Request, exc: HydroError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    else:
        logger.info("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.error_code},
    )


@app.get("/health")
def health_check():
    """Health check for monitoring"""
    return {"status": "healthy"}


app.include_router(auth.router, prefix=f"{settings.API_V1_STR}/auth", tags=["auth"])
app.include_router(corporations.router, prefix=f"{settings.API_V1_STR}/corporations", tags=["corporations"])
app.include_router(users.router, prefix=f"{settings.API_V1_STR}/users", tags=["users"])
app.include_router(departments.router, prefix=f"{settings.API_V1_STR}/departments", tags=["geography"])
app.include_router(municipalities.router, prefix=f"{settings.API_V1_STR}/municipalities", tags=["geography"])
app.include_router(catalogs.router, prefix=f"{settings.API_V1_STR}/catalogs", tags=["catalogs"])
app.include_router(water_basins.router, prefix=f"{settings.API_V1_STR}/water-basins", tags=["water-basins"])
app.include_router(discharge_users.router, prefix=f"{settings.API_V1_STR}/discharge-users", tags=["discharge-users"])
app.include_router(discharges.router, prefix=f"{settings.API_V1_STR}/discharges", tags=["discharges"])
app.include_router(monitoring_stations.router, prefix=f"{settings.API_V1_STR}/monitoring-stations",
                   tags=["monitoring"])
app.include_router(monitorings.router, prefix=f"{settings.API_V1_STR}/monitorings", tags=["monitoring"])
app.include_router(minimum_tariffs.router, prefix=f"{settings.API_V1_STR}/minimum-tariffs", tags=["tariffs"])
app.include_router(project_progress.router, prefix=f"{settings.API_V1_STR}/project-progress", tags=["tariffs"])
app.include_router(invoices.router, prefix=f"{settings.API_V1_STR}/invoices", tags=["invoices"])


@app.on_event("startup")
def startup_event():
    logger.info("%s started (environment: %s)", settings.PROJECT_NAME, settings.ENVIRONMENT)

    if settings.AUTO_CREATE_TABLES:
        from hydro.database import Base, engine
        import hydro.models  # noqa: F401 - registers every table on Base.metadata
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")
