import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from movie_reviews.config import VERSION, API_TITLE, API_DESCRIPTION
from movie_reviews.config.logging import setup_logging
from movie_reviews.db.database import engine, Base
from movie_reviews.db import models  # noqa: F401  registers the ORM tables
from movie_reviews.controllers.auth_controller import router as auth_router
from movie_reviews.controllers.movie_controller import router as movie_router
from movie_reviews.controllers.review_controller import router as review_router
from movie_reviews.exceptions.handlers import register_exception_handlers

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=VERSION
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],  
)

register_exception_handlers(app)

# include controllers
app.include_router(auth_router)
app.include_router(movie_router)
app.include_router(review_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} 500 {duration_ms:.1f}ms")
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms")
    return response


def init_db():
    Base.metadata.create_all(bind=engine)

init_db()


@app.get("/health")
def health_check():
    return {"status": "healthy"}
