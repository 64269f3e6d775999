from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quarterplan.api.routes import router as api_router
from quarterplan.core.config import settings
from quarterplan.core.database import SessionLocal, engine
from quarterplan.core.logging import configure_logging
from quarterplan.models.base import Base
from quarterplan.services.seed import seed_catalog
import quarterplan.models  # noqa: F401

configure_logging(settings.log_level)

app = FastAPI(title="Quarter Planner API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
    if settings.seed_catalog_on_startup:
        with SessionLocal() as db:
            seed_catalog(db, settings.catalog_seed_path)


@app.get("/health")
def health_check():
    return {"status": "ok"}
