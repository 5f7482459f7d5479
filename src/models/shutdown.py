"""
一括シャットダウン結果モデル

目的: シャットダウン処理の結果（成功・失敗・自コンテナの扱い）を構造化して返す
影響範囲: shutdown_service.py（生成）、shutdown_controller.py（APIレスポンス）
前提条件: なし
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from models.container import ContainerRecord


class ErrorKind(str, Enum):
    """ランタイム呼び出し失敗の分類"""

    TRANSPORT = "runtime_unavailable"
    RUNTIME = "runtime_error"


class ShutdownState(str, Enum):
    """シャットダウン処理の終了状態"""

    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class StopResult:
    """コンテナ1件分の停止結果"""

    container_id: str
    ok: bool
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.container_id,
            "error": self.error,
            "error_type": self.error_kind.value if self.error_kind else None,
        }


@dataclass
class ShutdownOutcome:
    """
    一括シャットダウン1回分の結果

    責務:
        - 停止に成功/失敗したコンテナの集約
        - 自コンテナの検出結果と自己停止の実施有無の保持
        - レスポンスメッセージの保持

    注意:
        - リクエストごとに生成し、レスポンス返却後は破棄する
    """

    state: ShutdownState = ShutdownState.COMPLETED
    results: List[StopResult] = field(default_factory=list)
    self_container: Optional[ContainerRecord] = None
    self_ambiguous: bool = False
    self_termination_attempted: bool = False
    self_stop_error: Optional[str] = None
    host_shutdown_requested: bool = False
    message: str = ""
    error: Optional[Exception] = None

    @property
    def self_found(self) -> bool:
        return self.self_container is not None

    @property
    def stopped(self) -> List[str]:
        return [r.container_id for r in self.results if r.ok]

    @property
    def failed(self) -> List[StopResult]:
        return [r for r in self.results if not r.ok]

    def to_dict(self) -> Dict[str, Any]:
        """
        結果を辞書形式に変換（API レスポンス用）

        Returns:
            dict: {
                "status": "completed" | "partial",
                "message": str,
                "stopped": list[str],
                "failed": list[dict],
                "self_found": bool,
                "self_ambiguous": bool,
                "self_termination_attempted": bool
            }
        """
        return {
            "status": self.state.value,
            "message": self.message,
            "stopped": self.stopped,
            "failed": [r.to_dict() for r in self.failed],
            "self_found": self.self_found,
            "self_ambiguous": self.self_ambiguous,
            "self_termination_attempted": self.self_termination_attempted,
        }
