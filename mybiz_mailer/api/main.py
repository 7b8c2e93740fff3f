from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from ..core.logging import setup_logging
from ..core.config import settings
from ..core.exceptions import MailerError
from .routers import health, user

logger = setup_logging()
app = FastAPI(title="MYBIZ Mailer")


# Every service error becomes {success: false, message[, error]}
@app.exception_handler(MailerError)
async def mailer_exception_handler(request: Request, exc: MailerError):
    logger.warning(
        "Request failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
    )
    content = {"success": False, "message": exc.message}
    if exc.error:
        content["error"] = exc.error
    return JSONResponse(status_code=exc.status_code, content=content)


# Malformed bodies are client errors too; report them in the same shape
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error("Validation error: {errors}", errors=str(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Invalid request body",
            "error": jsonable_encoder(exc.errors()),
        },
    )


# CORS_ORIGINS can be set in .env as comma-separated list; "*" allows any origin
allowed_origins = [origin.strip() for origin in settings.cors_origins.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router)
app.include_router(user.router)
