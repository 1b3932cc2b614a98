from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from otp_auth.config import settings
from otp_auth.database import init_db
from otp_auth.exceptions import AuthError
from otp_auth.routes import auth_router, health_router

# Enable logging
logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 {settings.APP_NAME} auth backend starting up...")
    init_db()
    logger.info("✅ Server is ready to handle requests")
    yield
    logger.info(f"🛑 {settings.APP_NAME} auth backend shutting down...")


# Init app
app = FastAPI(title=f"{settings.APP_NAME} Auth Backend", version="1.0.0", lifespan=lifespan)

# CORS Setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600
)

# Route Registrations
for router in (auth_router, health_router):
    app.include_router(router)
    logger.info(f"Included router: {router.prefix}")


@app.get("/", include_in_schema=False)
async def root():
    return {
        "status": "ok",
        "message": f"Welcome to the {settings.APP_NAME} Auth API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": [
            "/api/auth/* - Signup, verification and login",
            "/api/health - System health check"
        ]
    }


# Flow errors carry their own status and public detail
@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    if exc.status_code >= 500:
        logger.error(f"Internal failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "otp_auth.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info"
    )
