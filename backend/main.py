"""
AI Sketch Studio - FastAPI主应用
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sketchify.core.config import settings
from sketchify.api.v1.router import api_router
from sketchify.core.log_messages import log_messages
from sketchify.core.log_utils import setup_logging, get_logger

# 初始化日志系统
setup_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """应用生命周期管理"""
    logger.info(log_messages.START_OPERATION, operation_name="应用启动")

    if not settings.gemini_api_key:
        logger.warning("未配置 GEMINI_API_KEY，素描生成请求将返回配置错误")

    logger.info(
        "应用启动完成",
        transport=settings.sketch_transport,
        model=settings.sketch_model
    )

    yield

    logger.info("应用关闭")


# 创建FastAPI应用实例
app = FastAPI(
    title=settings.project_name,
    version=settings.app_version,
    description="把照片转换为黑白艺术素描的AI服务",
    openapi_url=f"{settings.api_v1_str}/openapi.json",
    docs_url=f"{settings.api_v1_str}/docs",
    redoc_url=f"{settings.api_v1_str}/redoc",
    lifespan=lifespan
)

# 添加CORS中间件 - 确保在所有路由之前添加
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)

# 注册API路由
app.include_router(api_router, prefix=settings.api_v1_str)


@app.get("/")
def read_root():
    """根路径"""
    return {
        "message": "AI Sketch Studio API",
        "version": settings.app_version,
        "docs": f"{settings.api_v1_str}/docs"
    }


@app.get("/health")
def health_check():
    """健康检查（附带生成服务配置概况，不包含凭据）"""
    return {
        "status": "healthy",
        "transport": settings.sketch_transport,
        "model": settings.sketch_model,
        "api_key_configured": bool(settings.gemini_api_key)
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
        log_level=settings.log_level.lower()
    )
