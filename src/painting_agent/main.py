"""
FastAPI 应用入口
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from painting_agent.core import setup_logging, get_settings, get_logger
from painting_agent.api import api_router

# 初始化日志
settings = get_settings()
setup_logging(settings.log_level)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    from painting_agent.core.database import init_db

    init_db()
    logger.info("绘画创意 API 启动中...")
    yield
    logger.info("绘画创意 API 关闭")


app = FastAPI(
    title="绘画创意 API",
    description="标题 → 绘画创意 → 图片 的生成服务",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

# 生成的图片以 uploads/<文件名> 的相对路径对外提供
app.mount(
    f"/{settings.uploads_url_prefix}",
    StaticFiles(directory=settings.uploads_dir, check_dir=False),
    name="uploads",
)


@app.get("/")
async def root():
    """健康检查"""
    return {"status": "ok", "message": "绘画创意 API 运行中"}


@app.get("/health")
async def health():
    """健康检查"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"启动服务: http://{settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "painting_agent.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
