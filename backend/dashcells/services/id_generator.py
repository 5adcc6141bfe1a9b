import uuid

from dashcells.exceptions.cell_error import IDGenerationError


class UUIDGenerator:
    """生成随机UUID作为单元格ID"""

    def generate(self) -> str:
        try:
            return str(uuid.uuid4())
        except (OSError, NotImplementedError) as e:
            # uuid4 依赖 os.urandom，随机源不可用时会失败
            raise IDGenerationError(str(e)) from e
