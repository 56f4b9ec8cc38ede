"""
Shala Shikshak - FastAPI主应用
"""

import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import AppError
from app.core.log_utils import get_logger, setup_logging
from app.core.pdf import GhostscriptCompressor
from app.core.rate_limit import RateLimiter, periodic_sweep
from app.core.storage import StorageAccessError, StorageError, get_storage_service
from app.db.database import close_db, init_db
from app.schemas.common import ErrorResponse, HealthResponse
from app.utils.datetime_utils import to_iso_string, utc_now_naive
from app.utils.file_utils import PDF_EXTENSION, PDF_MIME_TYPE, get_file_extension

# 初始化日志系统
setup_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info("应用启动中...")

    storage = get_storage_service()
    storage.ensure_root()
    app.state.storage = storage
    app.state.compressor = GhostscriptCompressor()
    app.state.rate_limiter = RateLimiter()

    if settings.db_auto_create:
        await init_db()
        logger.info("数据表已创建")
    else:
        logger.info("数据库表结构由迁移脚本管理")

    sweep_task = asyncio.create_task(
        periodic_sweep(app.state.rate_limiter, settings.rate_limit_sweep_interval_seconds)
    )
    logger.info("应用启动完成", upload_dir=str(storage.root_dir))

    yield

    sweep_task.cancel()
    with suppress(asyncio.CancelledError):
        await sweep_task
    await close_db()
    logger.info("应用关闭")


class UploadedPdfFiles(StaticFiles):
    """上传目录静态文件服务，PDF以内联方式返回，便于前端嵌入预览"""

    def file_response(self, full_path, stat_result, scope, status_code=200):
        response = super().file_response(full_path, stat_result, scope, status_code)
        if get_file_extension(str(full_path)) == PDF_EXTENSION:
            response.headers["Content-Type"] = PDF_MIME_TYPE
            response.headers["Content-Disposition"] = "inline"
        response.headers["Accept-Ranges"] = "bytes"
        response.headers["Cache-Control"] = "public, max-age=31536000"
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET, HEAD, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Range, Content-Type"
        response.headers["Access-Control-Expose-Headers"] = "Content-Range, Content-Length, Accept-Ranges"
        return response


# 创建FastAPI应用实例
app = FastAPI(
    title=settings.project_name,
    version=settings.app_version,
    description="Shala Shikshak 教学内容服务：PDF上传、压缩与应用打开统计",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url=f"{settings.api_prefix}/docs",
    redoc_url=f"{settings.api_prefix}/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== 异常处理 ====================
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("请求处理失败", exception=exc, path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    if isinstance(exc, StorageAccessError):
        return JSONResponse(status_code=400, content={"error": "Invalid file path"})
    logger.error("文件操作失败", exception=exc, path=request.url.path)
    return JSONResponse(status_code=500, content={"error": "File operation failed"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    body = ErrorResponse(
        error="Invalid request",
        detail=str(exc.errors()) if settings.app_debug else None
    )
    return JSONResponse(status_code=422, content=body.model_dump(exclude_none=True))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("未处理的异常", exception=exc, path=request.url.path)
    body = ErrorResponse(
        error="Something went wrong!",
        detail=str(exc) if settings.app_debug else None
    )
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


# 注册API路由
app.include_router(api_router, prefix=settings.api_prefix)

# 上传文件的静态访问，两个前缀对应不同的前端部署方式
app.mount(
    "/uploads",
    UploadedPdfFiles(directory=settings.absolute_upload_dir, check_dir=False),
    name="uploads"
)
app.mount(
    f"{settings.api_prefix}/uploads",
    UploadedPdfFiles(directory=settings.absolute_upload_dir, check_dir=False),
    name="api-uploads"
)


def _health_payload() -> HealthResponse:
    return HealthResponse(
        message=f"{settings.app_name} API is running",
        timestamp=to_iso_string(utc_now_naive()),
    )


@app.get("/", response_model=HealthResponse)
def read_root():
    """根路径"""
    return _health_payload()


@app.get(f"{settings.api_prefix}/health", response_model=HealthResponse)
def health_check():
    """健康检查"""
    return _health_payload()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
        log_level=settings.log_level.lower()
    )
