"""
Datadog APM統合ミドルウェア

目的: Datadog APMトレース送信、カスタムタグ設定
影響範囲: すべてのエンドポイント、Docker ソケットへのリクエスト
前提条件: ddtrace がインストールされている
"""

from ddtrace import patch, tracer
from config.settings import Settings
from infrastructure.logger import get_logger
import os

logger = get_logger()


def setup_datadog(settings: Settings) -> bool:
    """
    Datadog APMを初期化

    目的:
        - FastAPI と requests（docker SDK のトランスポート）の自動インストルメンテーション
        - サービス名、環境、バージョンを設定
        - カスタムタグの設定

    前提条件:
        - DD_AGENT_HOST に Datadog Agent が存在する（デフォルト: datadog-agent）

    Args:
        settings (Settings): アプリケーション設定

    Returns:
        bool: True（初期化した）、False（DD_TRACE_ENABLED=false のためスキップ）
    """
    if not settings.DD_TRACE_ENABLED:
        logger.info("Datadog APM disabled")
        return False

    # 環境変数設定（ddtrace が自動的に読み取る）
    os.environ["DD_SERVICE"] = settings.DD_SERVICE
    os.environ["DD_ENV"] = settings.DD_ENV
    os.environ["DD_VERSION"] = settings.DD_VERSION
    os.environ["DD_AGENT_HOST"] = settings.DD_AGENT_HOST
    os.environ.setdefault("DD_TRACE_AGENT_PORT", "8126")

    # Docker API 呼び出しは requests 経由なので requests もトレース対象
    patch(fastapi=True, requests=True)

    tracer.set_tags({
        "service": settings.DD_SERVICE,
        "env": settings.DD_ENV,
        "version": settings.DD_VERSION,
    })

    logger.info(
        "Datadog APM initialized",
        extra={"operation": "setup_datadog"}
    )
    return True


def tag_current_span(**tags) -> None:
    """
    現在のスパンにカスタムタグを設定（スパンが無い場合は何もしない）

    Args:
        **tags: タグ名と値（例: operation="shutdown_all"）
    """
    span = tracer.current_span()
    if span:
        for key, value in tags.items():
            span.set_tag(key.replace("__", "."), value)


def tag_current_span_error(error_type: str, message: str) -> None:
    """現在のスパンにエラー情報を設定"""
    span = tracer.current_span()
    if span:
        span.set_tag("error", True)
        span.set_tag("error.type", error_type)
        span.set_tag("error.message", message)
