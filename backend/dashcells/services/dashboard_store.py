import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict

from pydantic import ValidationError

from dashcells.exceptions.cell_error import DashboardNotFoundError, DashboardStoreError
from dashcells.models.dashboard import Dashboard

logger = logging.getLogger(__name__)


class DashboardsStore(ABC):
    """
    仪表盘存储端口

    get 返回的是存储内容的独立副本，调用方修改后需通过 update 整体写回。
    没有版本号或比较交换，多个请求并发修改同一仪表盘时以最后一次写入为准。
    """

    @abstractmethod
    def get(self, dashboard_id: int) -> Dashboard:
        raise NotImplementedError

    @abstractmethod
    def update(self, dashboard: Dashboard) -> None:
        raise NotImplementedError

    @abstractmethod
    def add(self, dashboard: Dashboard) -> Dashboard:
        raise NotImplementedError


class InMemoryDashboardsStore(DashboardsStore):
    """内存存储，保存序列化后的仪表盘"""

    def __init__(self):
        self._dashboards: Dict[int, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, dashboard_id: int) -> Dashboard:
        with self._lock:
            data = self._dashboards.get(dashboard_id)
        if data is None:
            raise DashboardNotFoundError(dashboard_id)
        return Dashboard.model_validate(data)

    def update(self, dashboard: Dashboard) -> None:
        with self._lock:
            if dashboard.id not in self._dashboards:
                raise DashboardNotFoundError(dashboard.id)
            self._dashboards[dashboard.id] = dashboard.model_dump(by_alias=True)
        logger.debug(f"仪表盘已更新，ID: {dashboard.id}")

    def add(self, dashboard: Dashboard) -> Dashboard:
        with self._lock:
            self._dashboards[dashboard.id] = dashboard.model_dump(by_alias=True)
        logger.info(f"仪表盘已添加，ID: {dashboard.id}")
        return Dashboard.model_validate(self._dashboards[dashboard.id])


class JsonFileDashboardsStore(DashboardsStore):
    """把全部仪表盘保存在单个JSON文件中的存储"""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        logger.info(f"使用JSON文件存储仪表盘: {self.path}")

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"读取仪表盘文件失败 - 路径: {self.path}, 错误: {str(e)}")
            raise DashboardStoreError(f"unable to read {self.path}: {e}") from e

    def _save(self, dashboards: Dict[str, Dict[str, Any]]) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(dashboards, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"写入仪表盘文件失败 - 路径: {self.path}, 错误: {str(e)}")
            raise DashboardStoreError(f"unable to write {self.path}: {e}") from e

    def get(self, dashboard_id: int) -> Dashboard:
        with self._lock:
            dashboards = self._load()
        data = dashboards.get(str(dashboard_id))
        if data is None:
            raise DashboardNotFoundError(dashboard_id)
        return Dashboard.model_validate(data)

    def update(self, dashboard: Dashboard) -> None:
        with self._lock:
            dashboards = self._load()
            key = str(dashboard.id)
            if key not in dashboards:
                raise DashboardNotFoundError(dashboard.id)
            dashboards[key] = dashboard.model_dump(by_alias=True)
            self._save(dashboards)
        logger.debug(f"仪表盘已写入文件，ID: {dashboard.id}")

    def add(self, dashboard: Dashboard) -> Dashboard:
        with self._lock:
            dashboards = self._load()
            dashboards[str(dashboard.id)] = dashboard.model_dump(by_alias=True)
            self._save(dashboards)
        logger.info(f"仪表盘已添加，ID: {dashboard.id}")
        return dashboard.model_copy(deep=True)


def load_seed_dashboards(store: DashboardsStore, path: str) -> int:
    """从JSON文件导入仪表盘（仪表盘对象数组），同ID的仪表盘会被覆盖，返回导入数量"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"读取仪表盘种子文件失败 - 路径: {path}, 错误: {str(e)}")
        raise DashboardStoreError(f"unable to read seed file {path}: {e}") from e

    if not isinstance(data, list):
        raise DashboardStoreError(f"seed file {path} must contain a JSON array of dashboards")

    try:
        dashboards = [Dashboard.model_validate(item) for item in data]
    except ValidationError as e:
        raise DashboardStoreError(f"invalid dashboard in seed file {path}: {e}") from e

    for dashboard in dashboards:
        store.add(dashboard)
    logger.info(f"已从 {path} 导入 {len(dashboards)} 个仪表盘")
    return len(dashboards)


def create_dashboards_store(kind: str, path: str, seed_path: str = "") -> DashboardsStore:
    store: DashboardsStore
    if kind == "file":
        store = JsonFileDashboardsStore(path)
    else:
        store = InMemoryDashboardsStore()
    if seed_path:
        load_seed_dashboards(store, seed_path)
    return store
