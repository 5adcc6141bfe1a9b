from typing import Optional

import nh3

from dashcells.exceptions.cell_error import (
    CellValidationError,
    InvalidAxisError,
    InvalidCellQueryTypeError,
    InvalidColorError,
    InvalidColorTypeError,
    InvalidLegendError,
    InvalidLegendOrientationError,
    InvalidLegendTypeError,
    InvalidNoteVisibilityError,
    InvalidQueryConfigError,
)
from dashcells.models.dashboard import DashboardCell, QueryConfig, QueryField

# 未指定或非法时使用的默认宽高
DEFAULT_WIDTH = 4
DEFAULT_HEIGHT = 4

VALID_AXES = ("x", "y", "y2")
VALID_AXIS_SCALES = ("linear", "log", "")
VALID_AXIS_BASES = ("10", "2", "", "raw")
VALID_COLOR_TYPES = ("max", "min", "threshold", "text", "background", "scale")
VALID_LEGEND_ORIENTATIONS = ("top", "bottom", "right", "left")
# 新增图例类型时需要同步更新 InvalidLegendTypeError 的消息
VALID_LEGEND_TYPES = ("static",)
VALID_QUERY_TYPES = ("influxql", "flux")
VALID_NOTE_VISIBILITIES = ("default", "showWhenNoData")
VALID_FIELD_TYPES = ("func", "field", "integer", "number", "regex", "wildcard")

DEFAULT_QUERY_TYPE = "influxql"
DEFAULT_NOTE_VISIBILITY = "default"


def valid_dashboard_cell_request(cell: Optional[DashboardCell]) -> None:
    """
    校验单元格请求，遇到第一个错误即抛出 CellValidationError

    宽高修正、时间偏移迁移和查询类型默认值会直接修改传入的单元格，
    即使后续的检查失败，这些修改也会保留。
    """
    if cell is None:
        raise CellValidationError("dashboard cell was nil")

    validate_note(cell)
    correct_width_height(cell)
    for query in cell.queries or []:
        validate_query_config(query.query_config)
    move_time_shift(cell)
    has_correct_axes(cell)
    has_correct_query_type(cell)
    has_correct_colors(cell)
    has_correct_legend(cell)


def validate_note(cell: DashboardCell) -> None:
    """清理备注中的HTML以防XSS，并校验备注可见性"""
    cell.note = nh3.clean(cell.note)

    if cell.note_visibility == "":
        cell.note_visibility = DEFAULT_NOTE_VISIBILITY
    if cell.note_visibility not in VALID_NOTE_VISIBILITIES:
        raise InvalidNoteVisibilityError()


def correct_width_height(cell: DashboardCell) -> None:
    if cell.w < 1:
        cell.w = DEFAULT_WIDTH
    if cell.h < 1:
        cell.h = DEFAULT_HEIGHT


def _check_field_type(field: QueryField) -> None:
    if field.type not in VALID_FIELD_TYPES:
        raise InvalidQueryConfigError(
            f'invalid field type "{field.type}" ; expect func, field, integer, number, regex, wildcard'
        )


def validate_query_config(query_config: QueryConfig) -> None:
    """校验查询配置中的字段类型，函数参数只检查第一层"""
    for field in query_config.fields:
        _check_field_type(field)
        for arg in field.args:
            _check_field_type(arg)


def move_time_shift(cell: DashboardCell) -> None:
    """把时间偏移从查询配置迁移到查询本身"""
    for query in cell.queries or []:
        query.shifts = query.query_config.shifts


def has_correct_axes(cell: DashboardCell) -> None:
    for label, axis in (cell.axes or {}).items():
        if label not in VALID_AXES:
            raise InvalidAxisError()
        if axis.scale not in VALID_AXIS_SCALES:
            raise InvalidAxisError()
        if axis.base not in VALID_AXIS_BASES:
            raise InvalidAxisError()


def has_correct_query_type(cell: DashboardCell) -> None:
    """空查询类型默认为 influxql，其余只允许 flux 和 influxql"""
    for query in cell.queries or []:
        if query.type == "":
            query.type = DEFAULT_QUERY_TYPE
        if query.type not in VALID_QUERY_TYPES:
            raise InvalidCellQueryTypeError()


def has_correct_colors(cell: DashboardCell) -> None:
    for color in cell.colors or []:
        if color.type not in VALID_COLOR_TYPES:
            raise InvalidColorTypeError()
        if len(color.hex) != 7:
            raise InvalidColorError()


def has_correct_legend(cell: DashboardCell) -> None:
    legend = cell.legend
    # 未设置图例
    if legend.type == "" and legend.orientation == "":
        return

    if legend.type == "" or legend.orientation == "":
        raise InvalidLegendError()
    if legend.orientation not in VALID_LEGEND_ORIENTATIONS:
        raise InvalidLegendOrientationError()
    if legend.type not in VALID_LEGEND_TYPES:
        raise InvalidLegendTypeError()
