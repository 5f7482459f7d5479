"""
一括シャットダウンコントローラー

目的: 自コンテナ以外の全コンテナ停止、自コンテナの停止
影響範囲: POST /shutdown/all
前提条件: ShutdownService
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import List, Optional

from api.dependencies import get_host_shutdown, get_runtime, get_settings
from config.settings import Settings
from infrastructure.datadog_middleware import tag_current_span
from infrastructure.lifecycle import HostShutdown
from infrastructure.logger import get_logger
from models.shutdown import ShutdownState
from repositories.runtime_client import RuntimeClient
from services.shutdown_service import ShutdownService

logger = get_logger()
router = APIRouter()


class FailedStopResponse(BaseModel):
    """停止失敗コンテナ"""
    id: str
    error: Optional[str]
    error_type: Optional[str]


class ShutdownResponse(BaseModel):
    """一括シャットダウンレスポンス"""
    status: str = Field(..., description="completed | partial")
    message: str
    stopped: List[str]
    failed: List[FailedStopResponse]
    self_found: bool
    self_ambiguous: bool
    self_termination_attempted: bool


@router.post("/shutdown/all", response_model=ShutdownResponse)
def shutdown_all(
    settings: Settings = Depends(get_settings),
    runtime: RuntimeClient = Depends(get_runtime),
    host_shutdown: HostShutdown = Depends(get_host_shutdown),
):
    """
    自コンテナ以外の全コンテナを停止し、設定に応じて自コンテナも停止

    Returns:
        ShutdownResponse: 処理結果（一部失敗・自コンテナ未検出でも 200）

    Raises:
        RuntimeUnavailableError(500): コンテナ列挙時にランタイムへ到達できない
        RuntimeRequestError(500): コンテナ列挙をランタイムが拒否
    """
    logger.warning(
        "Shutdown all request received",
        extra={
            "operation": "shutdown_all",
            "severity": "warning"
        }
    )

    outcome = ShutdownService(runtime, settings, host_shutdown).shutdown_all()

    tag_current_span(
        operation="shutdown_all",
        outcome__state=outcome.state.value,
        stopped__count=len(outcome.stopped),
        failed__count=len(outcome.failed),
    )

    if outcome.state is ShutdownState.FAILED:
        raise outcome.error

    return outcome.to_dict()
