import logging
import traceback
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockledger.api import branches, inventory, products, reports, stocks, suppliers
from stockledger.config import settings
from stockledger.database import init_db
from stockledger.services.errors import StockLedgerError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    yield


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Inbound inventory entries and per-branch stock levels",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(StockLedgerError)
async def stock_ledger_error_handler(request: Request, exc: StockLedgerError):
    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Schema failures are client errors: 400 with the validator's field details."""
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"error": "Invalid input data", "details": exc.errors()}),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return JSON for unhandled exceptions so clients can parse the error."""
    logger.error("Unhandled error: %s\n%s", exc, traceback.format_exc())
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(inventory.router, prefix="/api/v1")
app.include_router(stocks.router, prefix="/api/v1")
app.include_router(products.router, prefix="/api/v1")
app.include_router(branches.router, prefix="/api/v1")
app.include_router(suppliers.router, prefix="/api/v1")
app.include_router(reports.router, prefix="/api/v1")


@app.get("/health")
def health():
    return {"status": "ok"}


def run():
    uvicorn.run("stockledger.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
