"""
ホストプロセスのシャットダウン要求

目的: 自プロセス（uvicorn）へのグレースフルシャットダウン要求
影響範囲: shutdown_service.py（一括シャットダウンのステップ4）
前提条件: uvicorn が SIGTERM を受けてグレースフルに停止する

注意:
    - これはあくまで要求であり、コンテナ自体の停止は保証しない
    - コンテナを確実に止めるのはランタイムへの自己停止リクエスト（ステップ5）
"""

import os
import signal

from infrastructure.logger import get_logger

logger = get_logger()


class HostShutdown:
    """
    自プロセスへの SIGTERM 送信

    責務:
        - リクエスト処理系のグレースフルシャットダウン開始
    """

    def __init__(self, sig: int = signal.SIGTERM):
        self.sig = sig

    def request_shutdown(self) -> None:
        logger.warning(
            "Host shutdown requested",
            extra={
                "operation": "host_shutdown",
                "severity": "warning"
            }
        )
        os.kill(os.getpid(), self.sig)
