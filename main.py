import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from app.config import get_settings, require_credentials
from app.exceptions import ConfigurationError, UpstreamError, ValidationError
from app.log import setup_logging
from app.routes import router


logger = setup_logging(get_settings().LOG_LEVEL)

app = FastAPI(title="Binance Pair Portfolio")


app.include_router(router)


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(UpstreamError)
async def upstream_exception_handler(request: Request, exc: UpstreamError):
    logger.error(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": exc.public_message})


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"{request.url.path}: unhandled error")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )


@app.get("/ready")
async def server_liveness():
    return {"status": "running"}


if __name__ == "__main__":
    settings = get_settings()
    try:
        require_credentials(settings)
    except ConfigurationError as e:
        logging.getLogger("app").critical(str(e))
        sys.exit(1)

    logger.info(f"Listening at http://{settings.HOST}:{settings.PORT}")
    logger.info("Example: GET /orders?symbol=RUNEUSDT")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
