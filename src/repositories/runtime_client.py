"""
コンテナランタイム（Docker Engine）アクセス

目的: Docker ソケット経由のコンテナ一覧取得・停止
影響範囲: inventory_service.py, shutdown_service.py, health_controller.py
前提条件: DOCKER_SOCK_URI が正しく設定されている、Docker Engine が起動している
"""

import threading
from typing import Any, Dict, List, Optional, Protocol

import docker

from models.container import ContainerRecord, ContainerSnapshot, ContainerState
from infrastructure.logger import get_logger

logger = get_logger()


class RuntimeClient(Protocol):
    """ランタイムクライアントが満たすべきインターフェース"""

    def list_containers(self, include_all: bool) -> ContainerSnapshot:
        ...

    def stop_container(self, container_id: str, grace_seconds: int) -> None:
        ...

    def ping(self) -> bool:
        ...


def record_from_api(data: Dict[str, Any]) -> ContainerRecord:
    """
    Docker Engine API（GET /containers/json）の1要素を ContainerRecord に変換

    Args:
        data (Dict[str, Any]): {"Id": ..., "Names": [...], "Image": ..., "State": ..., "Status": ...}

    Returns:
        ContainerRecord: スナップショットエントリ
    """
    return ContainerRecord(
        id=data.get("Id", ""),
        names=tuple(data.get("Names") or ()),
        image=data.get("Image", ""),
        state=ContainerState.parse(data.get("State")),
        status=data.get("Status", ""),
    )


class DockerRuntimeClient:
    """
    docker SDK の薄いラッパー

    責務:
        - Docker Engine へのコンテナ一覧取得・停止リクエスト
        - API レスポンスをドメインモデルに変換

    注意:
        - docker.DockerClient は生成時にサーバのAPIバージョンを問い合わせるため、
          初回呼び出しまで生成を遅延する（ソケット不在でもアプリは起動できる）
        - 例外はそのまま送出する（分類は error_classifier.py の責務）
    """

    def __init__(self, base_url: str, client: Optional[docker.DockerClient] = None):
        self.base_url = base_url
        self._client = client
        self._lock = threading.Lock()

    @property
    def client(self) -> docker.DockerClient:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = docker.DockerClient(base_url=self.base_url)
        return self._client

    def list_containers(self, include_all: bool) -> ContainerSnapshot:
        """
        コンテナ一覧を取得

        Args:
            include_all (bool): True の場合、停止済みコンテナも含める

        Returns:
            ContainerSnapshot: ランタイムが返した順序のままのスナップショット
        """
        containers: List[Dict[str, Any]] = self.client.api.containers(all=include_all)
        logger.debug(
            f"Listed {len(containers)} containers",
            extra={"container_count": len(containers), "operation": "list_containers"}
        )
        return tuple(record_from_api(c) for c in containers)

    def stop_container(self, container_id: str, grace_seconds: int) -> None:
        """
        コンテナを停止（猶予時間経過後は Docker Engine が SIGKILL）

        Args:
            container_id (str): コンテナID
            grace_seconds (int): SIGKILL までの猶予秒数

        Raises:
            docker.errors.APIError: Docker Engine がリクエストを拒否
            requests.exceptions.ConnectionError: ソケットに到達できない
        """
        # docker SDK は HTTP タイムアウトに grace_seconds を加算する
        self.client.api.stop(container_id, timeout=grace_seconds)

    def ping(self) -> bool:
        return bool(self.client.ping())

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
