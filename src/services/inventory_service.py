"""
コンテナ一覧サービス

目的: ランタイムからコンテナスナップショットを取得
影響範囲: containers_controller.py（GET /list）、shutdown_service.py（列挙ステップ）
前提条件: RuntimeClient が提供されている
"""

from models.container import ContainerSnapshot
from repositories.runtime_client import RuntimeClient
from services.error_classifier import to_runtime_failure


class InventoryService:
    """
    コンテナスナップショット取得

    責務:
        - RuntimeClient への委譲（副作用なし）
        - 失敗時は分類済みの RuntimeFailure を送出（空の結果はエラーではない）
    """

    def __init__(self, runtime: RuntimeClient):
        self.runtime = runtime

    def snapshot(self, include_stopped: bool, operation: str = "listing containers") -> ContainerSnapshot:
        """
        スナップショットを取得

        Args:
            include_stopped (bool): True の場合、停止済みコンテナも含める
            operation (str): エラーメッセージに含める操作名

        Returns:
            ContainerSnapshot: コンテナスナップショット

        Raises:
            RuntimeUnavailableError: ランタイムに到達できない
            RuntimeRequestError: ランタイムがリクエストを拒否
        """
        try:
            return tuple(self.runtime.list_containers(include_all=include_stopped))
        except Exception as e:
            raise to_runtime_failure(e, operation) from e
