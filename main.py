import sys
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qbank_admin.infrastructure.config import CORS_ORIGINS, LOG_LEVEL
from qbank_admin.infrastructure.db.base import Base
from qbank_admin.infrastructure.db.session import engine
from qbank_admin.infrastructure.db import models  # noqa: F401  (registers tables)
from qbank_admin.presentation.error_handlers import register_exception_handlers
from qbank_admin.presentation.api.routers.question_router import router as question_router
from qbank_admin.presentation.api.routers.passage_router import router as passage_router
from qbank_admin.presentation.api.routers.type_router import router as type_router
from qbank_admin.presentation.api.routers.attempt_router import router as attempt_router
from qbank_admin.presentation.api.routers.dashboard_router import router as dashboard_router

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield


# Initialize FastAPI app
app = FastAPI(title="Question Bank Admin API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(question_router, prefix="/api")
app.include_router(passage_router, prefix="/api")
app.include_router(type_router, prefix="/api")
app.include_router(attempt_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")


@app.get("/")
def root():
    return {"status": "ok", "service": "Question Bank Admin API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
