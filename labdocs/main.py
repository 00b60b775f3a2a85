import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from labdocs.config import settings
from labdocs.routers import catalog, documents, results

logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(title="Lab Document Engine API", version="0.1.0")
logger = logging.getLogger(__name__)

allowed_origins = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"statusCode": 200, "message": "Success", "data": {"status": "ok", "service": "lab-documents"}}


@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": "lab-documents",
        "environment": settings.app_env,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


_ERROR_NAMES = {
    400: "BadRequest",
    404: "NotFound",
    405: "MethodNotAllowed",
    422: "ValidationError",
}


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    if status_code >= 500:
        error = "InternalServerError"
    else:
        error = _ERROR_NAMES.get(status_code, "HTTPError")
    return JSONResponse(
        status_code=status_code,
        content={"statusCode": status_code, "message": message, "error": error, **extra},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail) if exc.detail else "Request failed")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    # ctx may carry the raised exception object, which JSON cannot encode.
    errors = [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]
    return error_response(422, "Invalid request payload", details={"errors": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "An unexpected error occurred while composing lab documents")


app.include_router(catalog.router)
app.include_router(results.router)
app.include_router(documents.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
