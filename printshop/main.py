import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

# Import all models to ensure they're registered with SQLAlchemy Base
# This is needed for relationships between models in different files
from . import (
    models,  # noqa: F401
    models_invoice,  # noqa: F401
    models_quickbooks,  # noqa: F401
    models_work,  # noqa: F401
)
from .config import ALLOWED_ORIGINS, UPLOAD_DIR
from .database import Base, SessionLocal, engine
from .domain.catalog.router import paper_router, product_types_router
from .domain.companies.router import router as companies_router
from .domain.contacts.router import router as contacts_router
from .domain.contacts.router import walk_in_router
from .domain.integrations.quickbooks.router import router as quickbooks_router
from .domain.invoices.router import router as invoices_router
from .domain.offices.router import addresses_router
from .domain.offices.router import router as offices_router
from .domain.orders.router import items_router as order_items_router
from .domain.orders.router import notes_router as order_notes_router
from .domain.orders.router import payments_router as order_payments_router
from .domain.orders.router import router as orders_router
from .domain.production.router import (
    options_router,
    processing_router,
    proofs_router,
    typesetting_router,
)
from .domain.shipping.router import pickups_router
from .domain.shipping.router import router as shipping_router
from .domain.stocks.router import order_item_stocks_router, work_order_item_stocks_router
from .domain.users.router import management_router, roles_router
from .domain.users.router import router as users_router
from .domain.work_orders.router import items_router as work_order_items_router
from .domain.work_orders.router import notes_router as work_order_notes_router
from .domain.work_orders.router import router as work_orders_router
from .routes.upload import router as upload_router
from .seed import seed_roles_and_permissions

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    db = SessionLocal()
    try:
        seed_roles_and_permissions(db)
    finally:
        db.close()

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Print Shop API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# Routes
app.include_router(companies_router)
app.include_router(offices_router)
app.include_router(addresses_router)
app.include_router(contacts_router)
app.include_router(walk_in_router)
app.include_router(users_router)
app.include_router(roles_router)
app.include_router(management_router)
app.include_router(paper_router)
app.include_router(product_types_router)
app.include_router(shipping_router)
app.include_router(pickups_router)
app.include_router(order_item_stocks_router)
app.include_router(work_order_item_stocks_router)
app.include_router(typesetting_router)
app.include_router(options_router)
app.include_router(proofs_router)
app.include_router(processing_router)
app.include_router(work_orders_router)
app.include_router(work_order_items_router)
app.include_router(work_order_notes_router)
app.include_router(orders_router)
app.include_router(order_items_router)
app.include_router(order_notes_router)
app.include_router(order_payments_router)
app.include_router(invoices_router)
app.include_router(quickbooks_router)
app.include_router(upload_router)

# Locally stored uploads, used when R2 is not configured
Path(UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR), name="uploads")


@app.get("/")
def root():
    return {"status": "ok", "message": "Print Shop API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
