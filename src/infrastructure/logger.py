"""
構造化ログ出力

目的: JSON形式ログ出力、Datadog APM連携、トレースID自動付与
影響範囲: すべてのモジュール
前提条件: Settings（LOG_LEVEL, DD_SERVICE, DD_ENV）がアプリケーション起動時に渡される
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from ddtrace import tracer

from config.settings import Settings


LOGGER_NAME = "simple-docker-controller"

# extra で受け付けるカスタムフィールド
_EXTRA_FIELDS = (
    "container_id",
    "operation",
    "error_type",
    "severity",
    "grace_seconds",
    "container_count",
    "outcome_state",
)


def utc_now_iso() -> str:
    """現在時刻（UTC、ISO 8601形式、末尾 Z）"""
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


class JSONFormatter(logging.Formatter):
    """
    JSON形式のログフォーマッター

    責務:
        - ログレコードをJSON形式に変換
        - Datadog APM トレースID、スパンIDを自動付与
        - ISO 8601形式のタイムスタンプ

    影響範囲:
        - すべてのログ出力
    """

    def __init__(self, service: str, env: str):
        super().__init__()
        self.service = service
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        """
        ログレコードをJSON形式に変換

        Args:
            record (logging.LogRecord): ログレコード

        Returns:
            str: JSON形式のログ文字列

        出力例:
            {
                "timestamp": "2026-10-19T10:00:00Z",
                "level": "INFO",
                "message": "Stopped container 3f2a...",
                "dd.trace_id": "abc123",
                "dd.span_id": "def456",
                "container_id": "3f2a..."
            }
        """
        log_data: Dict[str, Any] = {
            "timestamp": utc_now_iso(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "service": self.service,
            "env": self.env,
        }

        # Datadog APM トレースID、スパンID を付与
        span = tracer.current_span()
        if span:
            log_data["dd.trace_id"] = span.trace_id
            log_data["dd.span_id"] = span.span_id

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.levelname == 'ERROR':
            log_data['status'] = 'error'

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def setup_logger(settings: Optional[Settings] = None) -> logging.Logger:
    """
    構造化ログを出力するロガーをセットアップ

    目的:
        - JSON形式の構造化ログ出力
        - Datadog APM トレースID自動付与
        - 設定によるログレベル制御

    Args:
        settings (Optional[Settings]): アプリケーション設定（None の場合はデフォルト値）

    Returns:
        logging.Logger: 設定済みロガー
    """
    settings = settings or Settings()
    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # 既存のハンドラをクリア（重複防止）
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter(settings.DD_SERVICE, settings.DD_ENV))
    logger.addHandler(handler)

    # ログの伝播を無効化（ルートロガーと重複しないようにする）
    logger.propagate = False

    global _logger
    _logger = logger
    return logger


# グローバルロガーインスタンス
_logger = None


def get_logger() -> logging.Logger:
    """
    グローバルロガーを取得（シングルトン）

    Returns:
        logging.Logger: 設定済みロガー
    """
    global _logger
    if _logger is None:
        _logger = setup_logger()
    return _logger
