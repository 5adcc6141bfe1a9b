from dashcells.core.config import settings
from dashcells.services.dashboard_store import DashboardsStore, create_dashboards_store
from dashcells.services.id_generator import UUIDGenerator

dashboards_store = create_dashboards_store(
    settings.DASHBOARD_STORE, settings.DASHBOARD_STORE_PATH, settings.DASHBOARD_SEED_PATH
)
id_generator = UUIDGenerator()

def get_dashboards_store() -> DashboardsStore:
    """
    依赖项注入函数，返回仪表盘存储实例
    """
    return dashboards_store

def get_id_generator() -> UUIDGenerator:
    """
    依赖项注入函数，返回单元格ID生成器
    """
    return id_generator
