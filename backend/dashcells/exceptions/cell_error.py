class CellValidationError(Exception):
    """单元格校验失败，消息直接返回给客户端"""

    message = "invalid dashboard cell"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidAxisError(CellValidationError):
    message = "Unexpected axis in cell. Valid axes are 'x', 'y', and 'y2'"


class InvalidColorTypeError(CellValidationError):
    message = "Invalid color type. Valid color types are 'min', 'max', 'threshold', 'text', 'background' and 'scale'"


class InvalidColorError(CellValidationError):
    message = "Invalid color. Accepted color format is #RRGGBB"


class InvalidLegendError(CellValidationError):
    message = "Invalid legend. Both type and orientation must be set"


class InvalidLegendTypeError(CellValidationError):
    message = "Invalid legend type. Valid legend type is 'static'"


class InvalidLegendOrientationError(CellValidationError):
    message = "Invalid orientation type. Valid orientation types are 'top', 'bottom', 'right', 'left'"


class InvalidCellQueryTypeError(CellValidationError):
    message = "Invalid cell query type: must be 'flux' or 'influxql'"


class InvalidNoteVisibilityError(CellValidationError):
    message = "dashboard cell note visibility value is invalid"


class InvalidQueryConfigError(CellValidationError):
    message = "invalid query config"


class DashboardNotFoundError(Exception):
    """存储中不存在指定的仪表盘"""

    def __init__(self, dashboard_id):
        self.dashboard_id = dashboard_id
        super().__init__(f"dashboard {dashboard_id} not found")


class DashboardStoreError(Exception):
    """仪表盘持久化失败"""


class IDGenerationError(Exception):
    """生成单元格ID失败"""
