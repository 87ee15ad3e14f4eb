# monthly_reports/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import exc as sa_exc

from monthly_reports.config import settings
from monthly_reports.core.errors import install_error_handlers
from monthly_reports.core.logging import RequestContextMiddleware, configure_logging
from monthly_reports.database import Base, engine
from monthly_reports.models import report, user  # noqa: F401  (register tables)
from monthly_reports.routers import reports, users

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Islamic Report Management System", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)
install_error_handlers(app)

# Include Routers
app.include_router(users.router)
app.include_router(reports.router)

# Create DB tables in development; production schemas come from Alembic
@app.on_event("startup")
async def startup_event():
    # ignore duplicate-object errors from previous partial runs
    async with engine.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
        except sa_exc.IntegrityError as e:
            msg = str(getattr(e, "orig", e))
            if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
                logger.warning("Ignored duplicate DDL error during create_all: %s", msg)
            else:
                raise
    logger.info("Connected to database, tables ready")

@app.get("/")
def read_root():
    return {"message": "Islamic Report Management System API"}

@app.get("/api/health", tags=["health"])
async def health_check():
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("monthly_reports.main:app", host="0.0.0.0", port=8000, reload=True)
