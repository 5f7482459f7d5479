"""
コンテナ関連のドメインモデル

目的: コンテナランタイムから取得したスナップショット、自コンテナ識別条件、停止ポリシーの表現
影響範囲: runtime_client.py（生成）、services（参照）、containers_controller.py（APIレスポンス）
前提条件: なし（純粋なデータ構造、ランタイムへの依存なし）
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ContainerState(str, Enum):
    """
    コンテナのライフサイクル状態

    Docker Engine API の State 値に対応。未知の値は UNKNOWN に丸める。
    """

    CREATED = "created"
    RESTARTING = "restarting"
    RUNNING = "running"
    REMOVING = "removing"
    PAUSED = "paused"
    EXITED = "exited"
    DEAD = "dead"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ContainerState":
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ContainerRecord:
    """
    コンテナスナップショットの1エントリ（イミュータブル）

    責務:
        - ランタイムが返したコンテナ情報の保持
        - APIレスポンス用の辞書変換

    影響範囲:
        - runtime_client.py: 生成
        - self_identifier.py: 自コンテナ判定
        - shutdown_service.py: 停止対象の決定
    """

    id: str
    names: Tuple[str, ...]
    image: str
    state: ContainerState
    status: str = ""

    @property
    def primary_name(self) -> Optional[str]:
        """先頭の名前（ランタイムの表記のまま、例: "/web"）"""
        return self.names[0] if self.names else None

    def to_dict(self) -> Dict[str, Any]:
        """
        エンティティを辞書形式に変換（API レスポンス用）

        Returns:
            dict: {
                "id": str,
                "names": list[str],
                "image": str,
                "state": str,
                "status": str
            }
        """
        return {
            "id": self.id,
            "names": list(self.names),
            "image": self.image,
            "state": self.state.value,
            "status": self.status,
        }

    def to_simple_dict(self) -> Dict[str, Any]:
        """簡易表示用の射影（name, state のみ）"""
        return {
            "name": self.primary_name,
            "state": self.state.value,
        }


# ランタイムから一度に取得したコンテナ一覧（取得順を保持）
ContainerSnapshot = Tuple[ContainerRecord, ...]


@dataclass(frozen=True)
class ControllerIdentity:
    """
    自コンテナの識別条件

    container_id が設定されている場合はIDの一致を優先し、
    部分文字列による照合はフォールバックとして扱う。
    """

    name_substring: str
    image_substring: str
    container_id: Optional[str] = None


@dataclass(frozen=True)
class StopPolicy:
    """停止ポリシー（SIGKILL に切り替えるまでの猶予秒数）"""

    grace_seconds: int = 30
