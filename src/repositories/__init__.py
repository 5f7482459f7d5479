"""
データアクセス層パッケージ

このパッケージはコンテナランタイム（Docker Engine）へのアクセスを提供します。
"""

from .runtime_client import DockerRuntimeClient, RuntimeClient, record_from_api

__all__ = [
    "DockerRuntimeClient",
    "RuntimeClient",
    "record_from_api",
]
