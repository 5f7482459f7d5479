"""
自コンテナ識別サービス

目的: スナップショットの中から本サービス自身が動いているコンテナを特定
影響範囲: shutdown_service.py（停止対象からの除外、自己停止）
前提条件: ControllerIdentity が起動時に設定から構築されている
"""

from typing import List, Optional

from models.container import ContainerRecord, ContainerSnapshot, ControllerIdentity


# Docker の短縮IDの長さ（これより短い先頭一致は受け付けない）
SHORT_ID_LENGTH = 12


def matches_id(record: ContainerRecord, container_id: Optional[str]) -> bool:
    """フルIDまたは短縮ID（12文字以上の先頭一致）での照合"""
    if not container_id:
        return False
    if record.id == container_id:
        return True
    return len(container_id) >= SHORT_ID_LENGTH and record.id.startswith(container_id)


def matches_substring(record: ContainerRecord, identity: ControllerIdentity) -> bool:
    """
    名前またはイメージ名の部分文字列照合（大文字小文字を区別、正規化なし）

    空文字列の条件は無効として扱う（空文字列はすべてにマッチしてしまうため）
    """
    if identity.name_substring and any(identity.name_substring in name for name in record.names):
        return True
    if identity.image_substring and identity.image_substring in record.image:
        return True
    return False


def find_candidates(snapshot: ContainerSnapshot, identity: ControllerIdentity) -> List[ContainerRecord]:
    """部分文字列にマッチする全コンテナ（スナップショットの順序のまま）"""
    return [record for record in snapshot if matches_substring(record, identity)]


def identify(snapshot: ContainerSnapshot, identity: ControllerIdentity) -> Optional[ContainerRecord]:
    """
    自コンテナを特定する

    ルール:
        1. identity.container_id が設定されていれば ID 一致を優先
        2. 見つからなければ部分文字列照合にフォールバック
        3. 複数マッチした場合はランタイムが返した順序で最初のもの（二次ソートなし）

    Args:
        snapshot (ContainerSnapshot): コンテナスナップショット
        identity (ControllerIdentity): 自コンテナの識別条件

    Returns:
        Optional[ContainerRecord]: 自コンテナ（見つからない場合 None、エラーではない）
    """
    if identity.container_id:
        for record in snapshot:
            if matches_id(record, identity.container_id):
                return record

    for record in snapshot:
        if matches_substring(record, identity):
            return record
    return None
