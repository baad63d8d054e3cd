import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.exceptions import (
    PaymentAppError,
    global_exception_handler,
    payment_app_exception_handler,
    validation_exception_handler,
)
from app.core.razorpay_client import razorpay_manager
from app.api.api import api_router
from app.schemas.common import HealthResponse

# Logging Configuration
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Razorpay Client
    if razorpay_manager.get_client() is not None:
        logger.info("Razorpay client initialized.")
    if not settings.RAZORPAY_WEBHOOK_SECRET:
        logger.warning("RAZORPAY_WEBHOOK_SECRET not set. Webhooks will be rejected.")
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

# Exception Handlers
app.add_exception_handler(PaymentAppError, payment_app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Include Router
app.include_router(api_router, prefix="/api")

@app.get("/", response_model=HealthResponse)
async def root():
    return HealthResponse(status="Razorpay backend is running")

def run():
    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)

if __name__ == "__main__":
    run()
