"""
エラーハンドリングミドルウェア

目的: 例外の一元キャッチ、エラーログ出力、適切なHTTPステータス返却
影響範囲: すべてのエンドポイント
前提条件: logger.py（構造化ログ）、ddtrace（Datadog APM）
"""

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from infrastructure.datadog_middleware import tag_current_span_error
from infrastructure.logger import get_logger, utc_now_iso
from services.errors import RuntimeFailure, UnauthorizedError

logger = get_logger()


def error_response(status_code: int, error_type: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "error_type": error_type,
            "message": message,
            "timestamp": utc_now_iso()
        }
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    FastAPIアプリケーションにエラーハンドラを登録

    目的:
        - 例外の一元キャッチ
        - エラーログ出力（構造化ログ、JSON形式）
        - 適切なHTTPステータスコードとエラーメッセージを返却

    ステータスコード:
        - UnauthorizedError: 401
        - RuntimeUnavailableError / RuntimeRequestError: 500（error_type で区別）
        - HTTPException: 例外で指定されたステータスコード
        - その他: 500

    Args:
        app (FastAPI): FastAPIアプリケーションインスタンス
    """

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_error_handler(request: Request, exc: UnauthorizedError):
        """
        操作無効化エラーハンドラ

        ステータスコード: 401 Unauthorized
        """
        logger.warning(
            f"Unauthorized: {exc}",
            extra={
                "error_type": "unauthorized",
                "severity": "warning"
            }
        )
        tag_current_span_error("unauthorized", str(exc))

        return error_response(401, "unauthorized", str(exc))

    @app.exception_handler(RuntimeFailure)
    async def runtime_failure_handler(request: Request, exc: RuntimeFailure):
        """
        コンテナランタイムエラーハンドラ

        ステータスコード: 500 Internal Server Error
        error_type: runtime_unavailable（到達不能）/ runtime_error（リクエスト拒否）
        """
        error_type = exc.error_kind.value
        logger.error(
            f"Runtime failure: {exc}",
            extra={
                "operation": exc.operation,
                "error_type": error_type,
                "severity": "error"
            }
        )
        tag_current_span_error(error_type, str(exc))

        return error_response(500, error_type, str(exc))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """
        HTTPExceptionハンドラ（FastAPI標準例外）

        ステータスコード: 例外で指定されたステータスコード
        """
        logger.error(
            f"HTTP exception: {exc.detail}",
            extra={
                "error_type": "http_exception",
                "severity": "error"
            }
        )
        tag_current_span_error("http_exception", str(exc.detail))

        return error_response(exc.status_code, "http_exception", exc.detail)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """
        一般例外ハンドラ（予期しない例外）

        ステータスコード: 500 Internal Server Error
        """
        logger.error(
            f"Unexpected error: {exc}",
            exc_info=True,
            extra={
                "error_type": "unexpected_error",
                "severity": "error"
            }
        )
        tag_current_span_error("unexpected_error", str(exc))

        return error_response(500, "unexpected_error", "An unexpected error occurred")
