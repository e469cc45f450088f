import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

# Import all models so Base.metadata knows every table
import models  # noqa: F401
from core.config import settings
from core.database import Base, SessionLocal, engine
from core.error_handlers import register_error_handlers
from core.logging_config import setup_logging, get_logger
from core.seed import seed_demo_data
from middleware import RequestIDMiddleware, limiter
from routers import categories, products, users, cart, orders, reviews
from storage import MemStorage, SqlStorage

setup_logging(
    log_level=settings.LOG_LEVEL,
    log_dir=settings.LOG_DIR
)

logger = get_logger(__name__)


def _seed(storage):
    if settings.SEED_DEMO_DATA:
        seed_demo_data(storage)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.STORAGE_BACKEND == "memory":
        app.state.storage = MemStorage()
        _seed(app.state.storage)
    else:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            _seed(SqlStorage(db))
        finally:
            db.close()

    logger.info("Application startup complete",
                extra={"event": "startup", "storage_backend": settings.STORAGE_BACKEND})
    yield
    logger.info("Application shutting down", extra={"event": "shutdown"})


app = FastAPI(
    title="Storefront API",
    description="Catalog, cart and checkout backend for the storefront client",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,  # the client sends credentials: 'include'
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Access log: one line per request with status and duration."""
    start_time = time.perf_counter()

    response = await call_next(request)

    duration_ms = (time.perf_counter() - start_time) * 1000
    client_ip = request.client.host if request.client else "unknown"

    logger.info(
        f'{client_ip} - "{request.method} {request.url.path}" {response.status_code}',
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip
        }
    )

    return response


# Added last so it wraps the access log and its id is set for every record
app.add_middleware(RequestIDMiddleware)

register_error_handlers(app)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.get("/health")
async def health_check():
    logger.debug("Health check requested")
    return {"status": "Healthy"}


app.include_router(categories.router)
app.include_router(products.router)
app.include_router(users.router)
app.include_router(cart.router)
app.include_router(orders.router)
app.include_router(reviews.router)
