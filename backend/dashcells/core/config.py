import os
from typing import List, Union
from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    API_V1_STR: str = "/chronograf/v1"
    PROJECT_NAME: str = "Dashboard Cells"

    # 调试配置
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "t")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # 服务监听配置
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8888"))

    # CORS配置
    CORS_ORIGINS: List[Union[str, AnyHttpUrl]] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8888",
        "http://127.0.0.1:8888"
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        return v

    # 仪表盘存储配置：memory 或 file
    DASHBOARD_STORE: str = os.getenv("DASHBOARD_STORE", "memory")
    DASHBOARD_STORE_PATH: str = os.getenv("DASHBOARD_STORE_PATH", "./dashboards.json")
    # 启动时导入的仪表盘JSON文件（仪表盘对象数组），为空则不导入
    DASHBOARD_SEED_PATH: str = os.getenv("DASHBOARD_SEED_PATH", "")

    @field_validator("DASHBOARD_STORE")
    @classmethod
    def check_dashboard_store(cls, v):
        if v not in ("memory", "file"):
            raise ValueError(f"不支持的仪表盘存储类型: {v}")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
