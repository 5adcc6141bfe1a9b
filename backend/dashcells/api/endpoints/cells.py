import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import ValidationError

from dashcells.api.deps import get_dashboards_store, get_id_generator
from dashcells.exceptions.cell_error import (
    CellValidationError,
    DashboardNotFoundError,
    DashboardStoreError,
    IDGenerationError,
)
from dashcells.models.dashboard import Dashboard, DashboardCell, DashboardCellResponse
from dashcells.services.cell_response import new_cell_response, new_cell_responses
from dashcells.services.cell_validation import valid_dashboard_cell_request
from dashcells.services.dashboard_store import DashboardsStore
from dashcells.services.id_generator import UUIDGenerator

# 设置日志
logger = logging.getLogger(__name__)

router = APIRouter()


def not_found(id) -> HTTPException:
    logger.warning(f"未找到ID为 {id} 的资源")
    return HTTPException(status_code=404, detail=f"ID {id} not found")


def fetch_dashboard(store: DashboardsStore, dashboard_id: int) -> Dashboard:
    try:
        return store.get(dashboard_id)
    except DashboardNotFoundError:
        raise not_found(dashboard_id)
    except DashboardStoreError as e:
        logger.error(f"读取仪表盘失败，ID: {dashboard_id}, 错误: {str(e)}")
        raise not_found(dashboard_id)


async def decode_cell(request: Request) -> DashboardCell:
    """解析请求体中的单元格，无法解析时返回400"""
    body = await request.body()
    try:
        return DashboardCell.model_validate_json(body)
    except ValidationError as e:
        logger.warning(f"无法解析的单元格JSON: {str(e)}")
        raise HTTPException(status_code=400, detail="Unparsable JSON")


def validate_cell(cell: DashboardCell) -> None:
    try:
        valid_dashboard_cell_request(cell)
    except CellValidationError as e:
        logger.warning(f"单元格数据校验失败: {e.message}")
        raise HTTPException(status_code=422, detail=e.message)


def find_cell_index(dashboard: Dashboard, cell_id: str) -> int:
    for i, cell in enumerate(dashboard.cells):
        if cell.id == cell_id:
            return i
    return -1


def update_dashboard(store: DashboardsStore, dashboard: Dashboard, msg: str) -> None:
    try:
        store.update(dashboard)
    except (DashboardStoreError, DashboardNotFoundError) as e:
        detail = f"{msg}: {e}"
        logger.error(detail)
        raise HTTPException(status_code=500, detail=detail)


@router.get("/{dashboard_id}/cells", response_model=List[DashboardCellResponse])
async def get_dashboard_cells(
    dashboard_id: int,
    store: DashboardsStore = Depends(get_dashboards_store),
):
    """
    获取仪表盘的所有单元格
    """
    logger.info(f"获取仪表盘单元格，仪表盘ID: {dashboard_id}")
    dashboard = fetch_dashboard(store, dashboard_id)
    return new_cell_responses(dashboard.id, dashboard.cells)


@router.post("/{dashboard_id}/cells", response_model=DashboardCellResponse)
async def create_dashboard_cell(
    dashboard_id: int,
    request: Request,
    store: DashboardsStore = Depends(get_dashboards_store),
    ids: UUIDGenerator = Depends(get_id_generator),
):
    """
    向已有仪表盘添加单元格
    """
    logger.info(f"创建单元格，仪表盘ID: {dashboard_id}")
    dashboard = fetch_dashboard(store, dashboard_id)
    cell = await decode_cell(request)
    validate_cell(cell)

    try:
        cell_id = ids.generate()
    except IDGenerationError as e:
        detail = f"Error creating cell ID of dashboard {dashboard_id}: {e}"
        logger.error(detail)
        raise HTTPException(status_code=500, detail=detail)
    cell.id = cell_id

    dashboard.cells.append(cell)
    update_dashboard(store, dashboard, f"Error adding cell {cell_id} to dashboard {dashboard_id}")

    logger.info(f"单元格创建成功，ID: {cell_id}")
    return new_cell_response(dashboard.id, cell)


@router.get("/{dashboard_id}/cells/{cell_id}", response_model=DashboardCellResponse)
async def get_dashboard_cell(
    dashboard_id: int,
    cell_id: str,
    store: DashboardsStore = Depends(get_dashboards_store),
):
    """
    获取仪表盘中的单个单元格
    """
    logger.info(f"获取单元格详情，仪表盘ID: {dashboard_id}, 单元格ID: {cell_id}")
    dashboard = fetch_dashboard(store, dashboard_id)

    for cell in new_cell_responses(dashboard.id, dashboard.cells):
        if cell.id == cell_id:
            return cell

    raise not_found(dashboard_id)


@router.delete("/{dashboard_id}/cells/{cell_id}", status_code=204, response_class=Response)
async def delete_dashboard_cell(
    dashboard_id: int,
    cell_id: str,
    store: DashboardsStore = Depends(get_dashboards_store),
):
    """
    从仪表盘中删除单元格
    """
    logger.info(f"删除单元格，仪表盘ID: {dashboard_id}, 单元格ID: {cell_id}")
    dashboard = fetch_dashboard(store, dashboard_id)

    index = find_cell_index(dashboard, cell_id)
    if index == -1:
        raise not_found(dashboard_id)

    del dashboard.cells[index]
    update_dashboard(store, dashboard, f"Error removing cell {cell_id} from dashboard {dashboard_id}")

    logger.info(f"单元格删除成功，ID: {cell_id}")
    return Response(status_code=204)


@router.put("/{dashboard_id}/cells/{cell_id}", response_model=DashboardCellResponse)
async def replace_dashboard_cell(
    dashboard_id: int,
    cell_id: str,
    request: Request,
    store: DashboardsStore = Depends(get_dashboards_store),
):
    """
    整体替换仪表盘中的单元格
    """
    logger.info(f"替换单元格，仪表盘ID: {dashboard_id}, 单元格ID: {cell_id}")
    dashboard = fetch_dashboard(store, dashboard_id)

    index = find_cell_index(dashboard, cell_id)
    if index == -1:
        raise not_found(cell_id)

    cell = await decode_cell(request)
    for axis in (cell.axes or {}).values():
        if len(axis.bounds) == 0:
            axis.bounds = ["", ""]

    validate_cell(cell)
    cell.id = cell_id

    dashboard.cells[index] = cell
    update_dashboard(store, dashboard, f"Error updating cell {cell_id} in dashboard {dashboard_id}")

    logger.info(f"单元格替换成功，ID: {cell_id}")
    return new_cell_response(dashboard.id, cell)
