"""
Main application entry point for the wiki.

This module sets up the FastAPI application and includes all necessary routers.
"""
from fastapi import FastAPI
import logging

# 导入自定义模块
from wikiapp.config import LOG_FILE
from wikiapp.auth import setup_auth_routes
from wikiapp.controllers import settings_router
from wikiapp.common import get_startup_service

# 设置日志记录
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(LOG_FILE, encoding='utf-8')
    ]
)
logger = logging.getLogger(__name__)

# 设置特定模块的日志级别
logging.getLogger('wikiapp.auth').setLevel(logging.DEBUG)
logging.getLogger('httpx').setLevel(logging.WARNING)

app = FastAPI(title="Wiki Settings", docs_url=None)

# 设置认证路由
setup_auth_routes(app)

# 包含路由器
app.include_router(settings_router)

@app.on_event("startup")
async def startup_event():
    """应用启动时执行的事件"""
    startup_service = get_startup_service()
    await startup_service.startup_initialization()

@app.on_event("shutdown")
async def shutdown_event():
    """应用关闭时执行的事件"""
    startup_service = get_startup_service()
    await startup_service.shutdown_cleanup()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
