"""
FastAPI 依存性注入

目的: 起動時に構築した設定・ランタイムクライアントを各エンドポイントへ渡す
影響範囲: 全Controller
前提条件: create_app() で app.state に settings, runtime, host_shutdown が設定されている
"""

from fastapi import Request

from config.settings import Settings
from infrastructure.lifecycle import HostShutdown
from repositories.runtime_client import RuntimeClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_runtime(request: Request) -> RuntimeClient:
    return request.app.state.runtime


def get_host_shutdown(request: Request) -> HostShutdown:
    return request.app.state.host_shutdown
