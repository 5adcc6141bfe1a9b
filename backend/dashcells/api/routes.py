from fastapi import APIRouter
from dashcells.api.endpoints import cells

api_router = APIRouter()

# 添加各个模块的路由
api_router.include_router(cells.router, prefix="/dashboards", tags=["cells"])
