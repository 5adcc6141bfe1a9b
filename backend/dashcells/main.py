from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dashcells.api.routes import api_router
from dashcells.core.config import settings
import logging
import sys
import uvicorn

# 配置日志
log_level = getattr(logging, settings.LOG_LEVEL)
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)
logger.info(f"应用启动中，调试模式：{settings.DEBUG}，日志级别：{settings.LOG_LEVEL}，存储：{settings.DASHBOARD_STORE}")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="仪表盘单元格 API",
    version="1.0.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    debug=settings.DEBUG
)

# 配置CORS中间件
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 包含API路由
logger.info(f"注册API路由，前缀：{settings.API_V1_STR}")
app.include_router(api_router, prefix=settings.API_V1_STR)

# 调试输出所有注册的路由
@app.on_event("startup")
async def startup_event():
    routes = []
    for route in app.routes:
        if hasattr(route, "methods") and hasattr(route, "path"):
            methods = ", ".join(sorted(route.methods))
            routes.append(f"{methods}: {route.path}")

    routes.sort()
    logger.info("已注册的API路由:")
    for route in routes:
        logger.info(f"  {route}")

@app.get("/")
def root():
    return {"message": "仪表盘单元格服务", "links": {"dashboards": f"{settings.API_V1_STR}/dashboards"}}

if __name__ == "__main__":
    logger.info("启动仪表盘单元格服务")
    uvicorn.run("dashcells.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
