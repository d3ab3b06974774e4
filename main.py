import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database.session import engine
from domain.plan import plan_router, plan_model
from domain.user import user_router, user_model
from domain.yoga import yoga_router
from exceptions import APIException
from services.scheduler_service import scheduler_service

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

user_model.Base.metadata.create_all(bind=engine)
plan_model.Base.metadata.create_all(bind=engine)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SCHEDULER_ENABLED:
        scheduler_service.start()
    logger.info(f"Environment: {settings.ENVIRONMENT}, verification: {settings.VERIFICATION_STRATEGY.value}")
    yield
    scheduler_service.stop()

app = FastAPI(
    title="Yoga Planner API",
    description="요가 수련 플랜 관리 서비스 백엔드 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 미들웨어 설정
origins = [origin for origin in [*settings.CORS_ORIGINS, settings.FRONTEND_URL] if origin]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Cookie"],
)

@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail, **exc.extra},
        headers=exc.headers,
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "errors": errors},
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = "Route not found" if exc.status_code == status.HTTP_404_NOT_FOUND else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Service temporarily unavailable"},
    )

# 도메인별 라우터를 앱에 포함시킵니다.
app.include_router(user_router.router, prefix="/api")
app.include_router(plan_router.router, prefix="/api")
app.include_router(yoga_router.router, prefix="/api")

@app.get("/")
async def root():
    return {"message": "Welcome to the Yoga Plan API"}

@app.get("/health")
async def health():
    return {"status": "OK", "message": "Server is running"}
