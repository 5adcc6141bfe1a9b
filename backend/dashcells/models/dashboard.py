from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class WireModel(BaseModel):
    """
    按原始JSON字段名（驼峰）收发的基础模型

    客户端常把未设置的字段写成 null，非 Optional 字段收到 null 时按未提供处理，使用字段默认值。
    """
    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data):
        if not isinstance(data, dict):
            return data
        nullable = set()
        for name, field in cls.model_fields.items():
            if field.default is None:
                nullable.add(name)
                if field.alias:
                    nullable.add(field.alias)
        return {k: v for k, v in data.items() if v is not None or k in nullable}


class TimeShift(WireModel):
    """查询时间偏移"""
    label: str = ""
    unit: str = ""
    quantity: str = ""


class QueryField(WireModel):
    """查询配置中的字段或函数，函数参数可以递归嵌套"""
    value: str = ""
    type: str = ""
    alias: str = ""
    args: List["QueryField"] = Field(default_factory=list)


class GroupBy(WireModel):
    time: str = ""
    tags: List[str] = Field(default_factory=list)


class DurationRange(WireModel):
    upper: str = ""
    lower: str = ""


class QueryConfig(WireModel):
    """结构化查询配置"""
    id: str = ""
    database: str = ""
    measurement: str = ""
    retention_policy: str = Field("", alias="retentionPolicy")
    fields: List[QueryField] = Field(default_factory=list)
    tags: Dict[str, List[str]] = Field(default_factory=dict)
    group_by: GroupBy = Field(default_factory=GroupBy, alias="groupBy")
    are_tags_accepted: bool = Field(False, alias="areTagsAccepted")
    fill: str = ""
    raw_text: Optional[str] = Field(None, alias="rawText")
    range: Optional[DurationRange] = None
    shifts: Optional[List[TimeShift]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def null_tag_values(cls, v):
        if isinstance(v, dict):
            return {k: [] if vals is None else vals for k, vals in v.items()}
        return v


class DashboardQuery(WireModel):
    """单元格上的时序查询"""
    command: str = Field("", alias="query")
    label: str = ""
    query_config: QueryConfig = Field(default_factory=QueryConfig, alias="queryConfig")
    source: str = ""
    type: str = ""
    shifts: Optional[List[TimeShift]] = None


class Axis(WireModel):
    """图表坐标轴：x、y 或 y2"""
    bounds: List[str] = Field(default_factory=list)
    label: str = ""
    prefix: str = ""
    suffix: str = ""
    base: str = ""
    scale: str = ""

    @field_validator("bounds", mode="before")
    @classmethod
    def null_bounds(cls, v):
        if isinstance(v, list):
            return ["" if b is None else b for b in v]
        return v


class CellColor(WireModel):
    id: str = ""
    type: str = ""
    hex: str = ""
    name: str = ""
    value: str = ""


class Legend(WireModel):
    type: str = ""
    orientation: str = ""


class RenamableField(WireModel):
    internal_name: str = Field("", alias="internalName")
    display_name: str = Field("", alias="displayName")
    visible: bool = False


class TableOptions(WireModel):
    vertical_time_axis: bool = Field(False, alias="verticalTimeAxis")
    sort_by: RenamableField = Field(default_factory=RenamableField, alias="sortBy")
    wrapping: str = ""
    fix_first_column: bool = Field(False, alias="fixFirstColumn")


class DecimalPlaces(WireModel):
    is_enforced: bool = Field(False, alias="isEnforced")
    digits: int = 0


class DashboardCell(WireModel):
    """仪表盘单元格（可视化组件）"""
    id: str = Field("", alias="i")
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    name: str = ""
    queries: Optional[List[DashboardQuery]] = None
    axes: Optional[Dict[str, Axis]] = None
    type: str = ""
    colors: Optional[List[CellColor]] = None
    legend: Legend = Field(default_factory=Legend)
    table_options: TableOptions = Field(default_factory=TableOptions, alias="tableOptions")
    field_options: List[RenamableField] = Field(default_factory=list, alias="fieldOptions")
    time_format: str = Field("", alias="timeFormat")
    decimal_places: DecimalPlaces = Field(default_factory=DecimalPlaces, alias="decimalPlaces")
    note: str = ""
    note_visibility: str = Field("", alias="noteVisibility")

    @field_validator("axes", mode="before")
    @classmethod
    def null_axes(cls, v):
        if isinstance(v, dict):
            return {label: {} if axis is None else axis for label, axis in v.items()}
        return v


class Dashboard(WireModel):
    """仪表盘，独占其单元格"""
    id: int
    name: str = ""
    cells: List[DashboardCell] = Field(default_factory=list)
    templates: List[Dict[str, Any]] = Field(default_factory=list)
    organization: str = ""


class DashboardCellLinks(WireModel):
    self_link: str = Field(..., alias="self")


class DashboardCellResponse(DashboardCell):
    """带自引用链接的单元格响应模型"""
    links: DashboardCellLinks
