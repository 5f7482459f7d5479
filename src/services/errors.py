"""
ドメイン例外定義

目的: ランタイム障害とアクセス拒否を呼び出し元に区別して伝える
影響範囲: services（送出）、error_handler.py（HTTPレスポンスへの変換）
前提条件: なし
"""

from models.shutdown import ErrorKind


class RuntimeFailure(Exception):
    """
    コンテナランタイム呼び出し失敗の基底クラス

    発生条件:
        - Docker ソケットへの接続失敗
        - Docker Engine がリクエストを拒否
    """

    error_kind = ErrorKind.RUNTIME

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.operation = operation


class RuntimeUnavailableError(RuntimeFailure):
    """
    ランタイム到達不能エラー（トランスポート層）

    発生条件:
        - ソケットが存在しない、接続拒否、ソケットI/Oエラー
    """

    error_kind = ErrorKind.TRANSPORT


class RuntimeRequestError(RuntimeFailure):
    """
    ランタイムがリクエストを拒否したエラー（アプリケーション層）

    発生条件:
        - 存在しないコンテナID、不正なパラメータ、Docker Engine 内部エラー
    """

    error_kind = ErrorKind.RUNTIME


class UnauthorizedError(Exception):
    """
    操作が設定で無効化されているエラー

    発生条件:
        - ALLOW_LIST=false の状態でコンテナ一覧を要求
    """
    pass
