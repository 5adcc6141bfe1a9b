import uvicorn
import os
from dotenv import load_dotenv

# 加载环境变量
load_dotenv(".env")

if __name__ == "__main__":
    print("启动仪表盘单元格服务...")
    uvicorn.run(
        "dashcells.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8888")),
        reload=os.getenv("DEBUG", "False").lower() in ("true", "1", "t")
    )
