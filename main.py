from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os

import uvicorn

from app.api.filter_routes import router as filter_router
from app.api.view_mode_routes import router as view_mode_router
from app.services.filter_assembler import TRACE_ENV_KEY, trace_enabled
from app.services.view_modes import get_entity_types


app = FastAPI(title="Media Filter API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    # 直连开发/内网环境：放宽到任意来源；如需更严可改为白名单
    allow_origin_regex=r".*",
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

app.include_router(filter_router)
app.include_router(view_mode_router)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.on_event("startup")
def _announce_registry():
    entity_types = ", ".join(get_entity_types())
    print(f"[startup] 已加载实体类型: {entity_types}")
    if trace_enabled():
        print(f"[startup] 过滤编译追踪已开启 ({TRACE_ENV_KEY}={os.environ.get(TRACE_ENV_KEY)})")


def _resolve_port() -> int:
    try:
        return int(os.environ.get("MEDIA_APP_PORT", "8000"))
    except ValueError:
        print("[startup] MEDIA_APP_PORT 非法，回退到 8000")
        return 8000


if __name__ == "__main__":
    host = os.environ.get("MEDIA_APP_HOST", "0.0.0.0")
    port = _resolve_port()
    print(f"[boot] Media Filter API 即将启动: http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)
