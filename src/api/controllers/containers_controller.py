"""
コンテナ一覧コントローラー

目的: ランタイム上で稼働中のコンテナ一覧取得
影響範囲: GET /list
前提条件: AccessPolicy、InventoryService
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_runtime, get_settings
from config.settings import Settings
from infrastructure.datadog_middleware import tag_current_span
from infrastructure.logger import get_logger
from repositories.runtime_client import RuntimeClient
from services.access_policy import AccessPolicy, Operation
from services.inventory_service import InventoryService

logger = get_logger()
router = APIRouter()


@router.get("/list")
def list_containers(
    settings: Settings = Depends(get_settings),
    runtime: RuntimeClient = Depends(get_runtime),
):
    """
    稼働中のコンテナ一覧

    目的:
        - ランタイム上のコンテナ状態の確認
        - SIMPLE_LIST=true の場合は name, state のみに絞った一覧

    Returns:
        list: ContainerRecord の一覧、または {name, state} の一覧

    Raises:
        UnauthorizedError(401): ALLOW_LIST=false（ランタイムは呼び出さない）
        RuntimeUnavailableError(500): ランタイムに到達できない
        RuntimeRequestError(500): ランタイムがリクエストを拒否
    """
    # ランタイム呼び出し前にアクセス判定
    AccessPolicy(settings).require(Operation.LIST_CONTAINERS)

    snapshot = InventoryService(runtime).snapshot(include_stopped=False)

    tag_current_span(operation="list_containers", container__count=len(snapshot))
    logger.info(
        f"Listed {len(snapshot)} containers",
        extra={
            "operation": "list_containers",
            "container_count": len(snapshot)
        }
    )

    if settings.SIMPLE_LIST:
        return [record.to_simple_dict() for record in snapshot]
    return [record.to_dict() for record in snapshot]
