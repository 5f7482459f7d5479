"""
ドメインモデルパッケージ

このパッケージはコンテナスナップショットとシャットダウン結果の定義を含みます。
"""

from .container import (
    ContainerRecord,
    ContainerSnapshot,
    ContainerState,
    ControllerIdentity,
    StopPolicy,
)
from .shutdown import ErrorKind, ShutdownOutcome, ShutdownState, StopResult

__all__ = [
    "ContainerRecord",
    "ContainerSnapshot",
    "ContainerState",
    "ControllerIdentity",
    "StopPolicy",
    "ErrorKind",
    "ShutdownOutcome",
    "ShutdownState",
    "StopResult",
]
