from typing import Dict, Iterable, List

from dashcells.core.config import settings
from dashcells.models.dashboard import (
    Axis,
    DashboardCell,
    DashboardCellLinks,
    DashboardCellResponse,
)
from dashcells.services.cell_validation import (
    DEFAULT_NOTE_VISIBILITY,
    DEFAULT_QUERY_TYPE,
    VALID_AXES,
)

EMPTY_BOUNDS = ["", ""]


def cell_links_base() -> str:
    return f"{settings.API_V1_STR}/dashboards"


def new_cell_response(dashboard_id: int, cell: DashboardCell) -> DashboardCellResponse:
    """
    生成单元格的响应副本：补全空集合、默认查询类型、x/y/y2 三个坐标轴和备注可见性，
    并附带 links.self。传入的单元格不会被修改。
    """
    cell = cell.model_copy(deep=True)

    if cell.queries is None:
        cell.queries = []
    if cell.colors is None:
        cell.colors = []
    for query in cell.queries:
        if query.type == "":
            query.type = DEFAULT_QUERY_TYPE

    axes: Dict[str, Axis] = {}
    for label, axis in (cell.axes or {}).items():
        if len(axis.bounds) == 0:
            axis.bounds = list(EMPTY_BOUNDS)
        axes[label] = axis
    # 始终返回 x、y、y2 三个坐标轴
    for label in VALID_AXES:
        if label not in axes:
            axes[label] = Axis(bounds=list(EMPTY_BOUNDS))
    cell.axes = axes

    if cell.note_visibility == "":
        cell.note_visibility = DEFAULT_NOTE_VISIBILITY

    return DashboardCellResponse(
        **dict(cell),
        links=DashboardCellLinks(self_link=f"{cell_links_base()}/{dashboard_id}/cells/{cell.id}"),
    )


def new_cell_responses(dashboard_id: int, cells: Iterable[DashboardCell]) -> List[DashboardCellResponse]:
    return [new_cell_response(dashboard_id, cell) for cell in cells]
