"""
ビジネスロジック層パッケージ

このパッケージはコンテナ一覧、自コンテナ識別、一括シャットダウン、アクセス制御、
エラー分類を提供します。
"""

from .errors import (
    RuntimeFailure,
    RuntimeRequestError,
    RuntimeUnavailableError,
    UnauthorizedError,
)
from .access_policy import AccessPolicy, Operation
from .inventory_service import InventoryService
from .shutdown_service import ShutdownService

__all__ = [
    "RuntimeFailure",
    "RuntimeRequestError",
    "RuntimeUnavailableError",
    "UnauthorizedError",
    "AccessPolicy",
    "Operation",
    "InventoryService",
    "ShutdownService",
]
