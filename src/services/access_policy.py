"""
アクセス制御サービス

目的: 設定フラグによる操作の有効/無効の判定
影響範囲: containers_controller.py（GET /list）
前提条件: ALLOW_LIST が起動時に読み込まれている
"""

from enum import Enum

from config.settings import Settings
from services.errors import UnauthorizedError


class Operation(str, Enum):
    LIST_CONTAINERS = "list_containers"


class AccessPolicy:
    """
    静的なアクセス制御

    責務:
        - コンテナ一覧操作の許可判定（ALLOW_LIST）
        - 拒否時はランタイム呼び出し前に UnauthorizedError を送出

    影響範囲:
        - containers_controller.py
    """

    def __init__(self, settings: Settings):
        self.enabled = {
            Operation.LIST_CONTAINERS: settings.ALLOW_LIST,
        }

    def authorize(self, operation: Operation) -> bool:
        """
        操作が許可されているか

        Args:
            operation (Operation): 対象操作

        Returns:
            bool: True（許可）、False（拒否）
        """
        return self.enabled[operation]

    def require(self, operation: Operation) -> None:
        """
        操作が許可されていなければ例外を送出

        Raises:
            UnauthorizedError: 操作が無効化されている場合
        """
        if not self.authorize(operation):
            raise UnauthorizedError(f"Operation {operation.value} is disabled by configuration")
