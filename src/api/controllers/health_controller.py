"""
ヘルスチェックコントローラー

目的: サービス稼働確認、Docker ソケット疎通確認
影響範囲: コンテナのヘルスチェック、Datadog Synthetic Monitoring
前提条件: runtime_client.py（Docker ソケット接続）
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_runtime
from infrastructure.datadog_middleware import tag_current_span, tag_current_span_error
from infrastructure.logger import get_logger, utc_now_iso
from models.shutdown import ErrorKind
from repositories.runtime_client import RuntimeClient
from services.error_classifier import classify, describe

logger = get_logger()
router = APIRouter()


@router.get("/health")
def health_check(runtime: RuntimeClient = Depends(get_runtime)):
    """
    サービスレベルヘルスチェック

    目的:
        - サービス → Docker ソケットの疎通確認（ping）

    Returns:
        dict: ヘルスチェック結果
            - status: "ok" | "error"
            - runtime: "connected" | "unreachable" | "error"
            - timestamp: ISO 8601形式

    ステータスコード:
        - 200: ping 成功
        - 503: ping 失敗
    """
    tag_current_span(operation="health_check")

    try:
        runtime.ping()
    except Exception as e:
        kind = classify(e)
        runtime_status = "unreachable" if kind is ErrorKind.TRANSPORT else "error"
        logger.error(
            f"Runtime health check failed: {describe(e)}",
            extra={
                "operation": "health_check",
                "error_type": kind.value,
                "severity": "error"
            }
        )
        tag_current_span_error(kind.value, describe(e))

        return JSONResponse(
            status_code=503,
            content={
                "status": "error",
                "runtime": runtime_status,
                "timestamp": utc_now_iso()
            }
        )

    return {
        "status": "ok",
        "runtime": "connected",
        "timestamp": utc_now_iso()
    }
