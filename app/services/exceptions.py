from __future__ import annotations


class ServiceError(Exception):
    """Base class that carries a default HTTP status code for API mapping."""

    default_status = 400

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code if status_code is not None else self.default_status


class UnknownEntityTypeError(ServiceError):
    """实体类型不在字段映射表中（调用方的配置错误，而非用户数据问题）。"""

    default_status = 404

    def __init__(self, entity_type: str) -> None:
        super().__init__(f"unknown entity type: {entity_type!r}")
        self.entity_type = entity_type
