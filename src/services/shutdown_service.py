"""
一括シャットダウンサービス

目的: 自コンテナ以外の全コンテナを停止し、設定に応じて自コンテナも停止する
影響範囲: shutdown_controller.py（POST /shutdown/all）
前提条件: RuntimeClient、HostShutdown、Settings が提供されている

処理フロー:
    1. 列挙: 停止済みを含む全コンテナのスナップショットを1回だけ取得（失敗時は FAILED で終了）
    2. 自コンテナ識別: スナップショットから自コンテナを特定（見つからなくても続行）
    3. 他コンテナ停止: 自コンテナ以外を1件ずつ停止（1件の失敗で中断しない）
    4. ホストへのシャットダウン要求: 自プロセスにグレースフルシャットダウンを要求（保証なし）
    5. 自己停止: SELF_TERMINATE=true かつ自コンテナが特定できた場合のみ、同じポリシーで停止
"""

from typing import Optional

from config.settings import Settings
from infrastructure.lifecycle import HostShutdown
from infrastructure.logger import get_logger
from models.container import ContainerRecord, ContainerSnapshot
from models.shutdown import ShutdownOutcome, ShutdownState, StopResult
from repositories.runtime_client import RuntimeClient
from services import self_identifier
from services.error_classifier import classify, describe
from services.errors import RuntimeFailure
from services.inventory_service import InventoryService

logger = get_logger()

MESSAGE_REQUESTED = "Stopped all other containers and requested self shutdown."
MESSAGE_NOT_SELF = "Stopped all other containers but could not self shutdown."
MESSAGE_SELF_KILLED = "Stopped all other containers and self killed."


class ShutdownService:
    """
    一括シャットダウンのオーケストレーション

    責務:
        - スナップショット取得、自コンテナ識別、他コンテナ停止、自己停止の順序制御
        - 停止結果の集約（例外で中断せず StopResult として収集）
        - 終了状態とレスポンスメッセージの決定

    影響範囲:
        - shutdown_controller.py

    前提条件:
        - リクエストごとに生成する（インスタンス間で可変状態を共有しない）
    """

    def __init__(self, runtime: RuntimeClient, settings: Settings, host_shutdown: HostShutdown):
        self.runtime = runtime
        self.inventory = InventoryService(runtime)
        self.identity = settings.identity
        self.policy = settings.stop_policy
        self.self_terminate = settings.SELF_TERMINATE
        self.host_shutdown = host_shutdown

    def shutdown_all(self) -> ShutdownOutcome:
        """
        自コンテナ以外の全コンテナを停止

        Returns:
            ShutdownOutcome: 処理結果
                - FAILED: 列挙失敗（停止は一切行っていない、error に原因）
                - PARTIAL: 自コンテナを特定できなかった、または一部の停止に失敗
                - COMPLETED: すべて成功
        """
        outcome = ShutdownOutcome()

        # 1. 列挙
        try:
            snapshot = self.inventory.snapshot(
                include_stopped=True, operation="shutting down all containers"
            )
        except RuntimeFailure as e:
            logger.error(
                f"Container enumeration failed: {e}",
                extra={
                    "operation": "shutdown_all",
                    "error_type": e.error_kind.value,
                    "severity": "error"
                }
            )
            outcome.state = ShutdownState.FAILED
            outcome.error = e
            outcome.message = str(e)
            return outcome

        # 2. 自コンテナ識別
        outcome.self_container = self._identify_self(snapshot, outcome)
        self_id = outcome.self_container.id if outcome.self_container else None

        # 3. 他コンテナ停止
        for record in snapshot:
            if record.id == self_id:
                continue
            outcome.results.append(self._stop(record.id))

        # 4. ホストへのシャットダウン要求
        self._request_host_shutdown(outcome)

        # 5. 自己停止
        if self.self_terminate and outcome.self_container is not None:
            self._terminate_self(outcome.self_container, outcome)
        elif self.self_terminate:
            logger.warning(
                "Self container could not be located; skipping self termination",
                extra={"operation": "shutdown_all", "severity": "warning"}
            )

        self._finalize(outcome)
        logger.info(
            outcome.message,
            extra={
                "operation": "shutdown_all",
                "outcome_state": outcome.state.value,
                "container_count": len(outcome.stopped)
            }
        )
        return outcome

    def _identify_self(self, snapshot: ContainerSnapshot, outcome: ShutdownOutcome) -> Optional[ContainerRecord]:
        found = self_identifier.identify(snapshot, self.identity)
        if found is None:
            return None

        # 部分文字列照合で複数候補がある場合は先頭を採用するが、曖昧として記録
        if not self_identifier.matches_id(found, self.identity.container_id):
            candidates = self_identifier.find_candidates(snapshot, self.identity)
            if len(candidates) > 1:
                outcome.self_ambiguous = True
                logger.warning(
                    f"{len(candidates)} containers match the self identity; using the first one",
                    extra={
                        "operation": "shutdown_all",
                        "container_id": found.id,
                        "container_count": len(candidates),
                        "severity": "warning"
                    }
                )

        logger.info(
            f"Identified self container {found.id}",
            extra={"operation": "shutdown_all", "container_id": found.id}
        )
        return found

    def _stop(self, container_id: str) -> StopResult:
        try:
            self.runtime.stop_container(container_id, self.policy.grace_seconds)
        except Exception as e:
            kind = classify(e)
            logger.error(
                f"Failed to stop container {container_id}: {describe(e)}",
                extra={
                    "operation": "stop_container",
                    "container_id": container_id,
                    "error_type": kind.value,
                    "severity": "error"
                }
            )
            return StopResult(container_id=container_id, ok=False, error=describe(e), error_kind=kind)

        logger.info(
            f"Stopped container {container_id}",
            extra={
                "operation": "stop_container",
                "container_id": container_id,
                "grace_seconds": self.policy.grace_seconds
            }
        )
        return StopResult(container_id=container_id, ok=True)

    def _request_host_shutdown(self, outcome: ShutdownOutcome) -> None:
        try:
            self.host_shutdown.request_shutdown()
            outcome.host_shutdown_requested = True
        except Exception as e:
            logger.error(
                f"Host shutdown request failed: {e}",
                exc_info=True,
                extra={"operation": "host_shutdown", "severity": "error"}
            )

    def _terminate_self(self, record: ContainerRecord, outcome: ShutdownOutcome) -> None:
        outcome.self_termination_attempted = True
        logger.warning(
            f"Stopping self container {record.id}",
            extra={
                "operation": "self_terminate",
                "container_id": record.id,
                "grace_seconds": self.policy.grace_seconds,
                "severity": "warning"
            }
        )
        # 成功時は通常ここで自プロセスごと停止し、戻ってこない
        result = self._stop(record.id)
        if not result.ok:
            outcome.self_stop_error = result.error

    def _finalize(self, outcome: ShutdownOutcome) -> None:
        if not self.self_terminate:
            # 自コンテナ未検出時は「他コンテナ」として停止された可能性がある
            outcome.state = ShutdownState.COMPLETED if outcome.self_found else ShutdownState.PARTIAL
            outcome.message = MESSAGE_REQUESTED
        elif outcome.self_termination_attempted and outcome.self_stop_error is None:
            outcome.state = ShutdownState.COMPLETED
            outcome.message = MESSAGE_SELF_KILLED
        else:
            outcome.state = ShutdownState.PARTIAL
            outcome.message = MESSAGE_NOT_SELF
            if outcome.self_stop_error:
                outcome.message += f" Self stop failed: {outcome.self_stop_error}"

        failed = outcome.failed
        if failed:
            outcome.state = ShutdownState.PARTIAL
            ids = ", ".join(r.container_id for r in failed)
            outcome.message += f" Failed to stop {len(failed)} container(s): {ids}"
