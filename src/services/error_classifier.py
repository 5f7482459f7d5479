"""
ランタイムエラー分類サービス

目的: docker SDK から送出された例外を「到達不能」と「リクエスト拒否」に分類
影響範囲: inventory_service.py, shutdown_service.py, health_controller.py
前提条件: docker, requests がインストールされている
"""

import socket
from typing import Iterator, Optional

import requests
from docker.errors import APIError

from config.settings import redact_uri
from models.shutdown import ErrorKind
from services.errors import RuntimeFailure, RuntimeRequestError, RuntimeUnavailableError


# ソケット到達不能とみなす例外
_TRANSPORT_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    ConnectionError,
    TimeoutError,
    socket.gaierror,
)


def _error_chain(error: BaseException) -> Iterator[BaseException]:
    """__cause__ / __context__ をたどって例外を列挙（循環参照対策あり）"""
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def classify(error: BaseException) -> ErrorKind:
    """
    例外を分類する

    ルール:
        - 例外チェーンのどこかに接続系の例外があれば TRANSPORT
        - Docker Engine が HTTP で応答した（APIError）時点で以降は見ない → RUNTIME
        - それ以外はすべて RUNTIME

    Args:
        error (BaseException): ランタイム呼び出しで発生した例外

    Returns:
        ErrorKind: TRANSPORT または RUNTIME
    """
    if isinstance(error, RuntimeFailure):
        return error.error_kind

    for exc in _error_chain(error):
        # APIError は requests.HTTPError（OSError）のサブクラスなので先に判定
        if isinstance(exc, APIError):
            return ErrorKind.RUNTIME
        if isinstance(exc, _TRANSPORT_ERRORS):
            return ErrorKind.TRANSPORT
    return ErrorKind.RUNTIME


def describe(error: BaseException) -> str:
    """オペレーター向けのエラーメッセージ（認証情報はマスク）"""
    message = str(error) or error.__class__.__name__
    return redact_uri(message)


def to_runtime_failure(error: BaseException, operation: str) -> RuntimeFailure:
    """
    例外を分類済みのドメイン例外に変換

    Args:
        error (BaseException): 元の例外
        operation (str): 実行中の操作（例: "listing containers"）

    Returns:
        RuntimeFailure: RuntimeUnavailableError または RuntimeRequestError
    """
    if isinstance(error, RuntimeFailure):
        return error

    detail = describe(error)
    if classify(error) is ErrorKind.TRANSPORT:
        return RuntimeUnavailableError(
            f"Error {operation}: container runtime is unreachable ({detail})",
            operation=operation,
        )
    return RuntimeRequestError(f"Error {operation}: {detail}", operation=operation)
