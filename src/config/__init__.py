"""
設定管理パッケージ

環境変数から設定を読み込み、イミュータブルな Settings として提供します。
"""

from .settings import Settings, redact_uri

__all__ = ["Settings", "redact_uri"]
