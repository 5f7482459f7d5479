"""
FastAPI アプリケーションエントリーポイント

目的: FastAPIアプリケーション初期化、ルーティング設定、Datadog APM統合
影響範囲: アプリケーション全体
前提条件: 全モジュールが実装されている
"""

from typing import Optional

from fastapi import FastAPI

from config.settings import Settings
from infrastructure.datadog_middleware import setup_datadog
from infrastructure.error_handler import register_error_handlers
from infrastructure.lifecycle import HostShutdown
from infrastructure.logger import get_logger, setup_logger
from repositories.runtime_client import DockerRuntimeClient, RuntimeClient

# Controllersインポート
from api.controllers import containers_controller
from api.controllers import health_controller
from api.controllers import shutdown_controller

APP_NAME = "simple-docker-controller"
APP_VERSION = "1.0.0"

logger = get_logger()


def create_app(
    settings: Optional[Settings] = None,
    runtime: Optional[RuntimeClient] = None,
    host_shutdown: Optional[HostShutdown] = None,
) -> FastAPI:
    """
    FastAPIアプリケーションを構築

    目的:
        - 設定を一度だけ読み込み、app.state 経由で各コンポーネントへ渡す
        - ロガー、Datadog APM、エラーハンドラ、ルーターの登録

    Args:
        settings (Optional[Settings]): 設定（None の場合は環境変数から構築）
        runtime (Optional[RuntimeClient]): ランタイムクライアント（None の場合は Docker ソケット）
        host_shutdown (Optional[HostShutdown]): 自プロセスへのシャットダウン要求

    Returns:
        FastAPI: アプリケーションインスタンス
    """
    settings = settings or Settings.from_env()
    setup_logger(settings)
    setup_datadog(settings)

    # Swagger UI / ReDoc は開発環境のみ
    app = FastAPI(
        title=APP_NAME,
        description="Lists containers and shuts them all down through the Docker socket",
        version=APP_VERSION,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    app.state.settings = settings
    app.state.runtime = runtime or DockerRuntimeClient(settings.DOCKER_SOCK_URI)
    app.state.host_shutdown = host_shutdown or HostShutdown()

    # エラーハンドラ登録
    register_error_handlers(app)

    # ルーター登録
    app.include_router(health_controller.router, tags=["Health Check"])
    app.include_router(containers_controller.router, tags=["Containers"])
    app.include_router(shutdown_controller.router, tags=["Shutdown"])

    @app.on_event("startup")
    async def startup_event():
        """
        アプリケーション起動時処理

        目的:
            - 有効な設定のログ出力（認証情報はマスク）
        """
        logger.info(f"Docker client configured with Docker Uri: {settings.redacted_docker_uri}")
        logger.info(
            f"Docker ignore container: name={settings.IGNORE_CONTAINER_NAME!r} "
            f"image={settings.IGNORE_CONTAINER_IMAGE!r} id={settings.SELF_CONTAINER_ID or None!r}"
        )
        logger.info(
            f"Wait before killing container: {settings.WAIT_BEFORE_KILL} seconds",
            extra={"grace_seconds": settings.WAIT_BEFORE_KILL}
        )
        logger.info(
            f"Self terminate: {settings.SELF_TERMINATE}, list enabled: {settings.ALLOW_LIST}, "
            f"simple list: {settings.SIMPLE_LIST}"
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        """
        アプリケーション停止時処理

        目的:
            - Docker クライアントのクローズ
        """
        logger.info("Application shutting down")
        close = getattr(app.state.runtime, "close", None)
        if close is not None:
            close()

    @app.get("/")
    def root():
        """
        ルートエンドポイント

        Returns:
            dict: アプリケーション情報
        """
        return {
            "message": f"{APP_NAME} is running",
            "version": APP_VERSION,
            "docs": "/docs" if settings.is_development else None
        }

    return app


if __name__ == "__main__":
    import uvicorn

    # Uvicorn起動（開発環境用）
    # 本番環境ではDockerfileでCMDとして実行
    uvicorn.run(
        "main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8080,
        log_level="info"
    )
