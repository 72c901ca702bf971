from fastapi import FastAPI

from logo_review.api.routers.logos import router as logos_router
from logo_review.core.logging_config import configure_logging

configure_logging()

app = FastAPI(title="Logo Review")

app.include_router(logos_router, prefix="/logos", tags=["logos"])
