"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app
from models.container import ContainerRecord, ContainerState


def make_record(container_id, name, image="busybox:latest", state=ContainerState.RUNNING):
    return ContainerRecord(
        id=container_id,
        names=(name,) if isinstance(name, str) else tuple(name),
        image=image,
        state=state,
        status="Up 5 minutes",
    )


class FakeRuntime:
    """In-memory runtime client recording every call."""

    def __init__(self, containers=(), list_error=None, stop_errors=None, ping_error=None):
        self.containers = tuple(containers)
        self.list_error = list_error
        self.stop_errors = stop_errors or {}
        self.ping_error = ping_error
        self.list_calls = []
        self.stop_calls = []

    def list_containers(self, include_all):
        self.list_calls.append(include_all)
        if self.list_error is not None:
            raise self.list_error
        if include_all:
            return self.containers
        return tuple(c for c in self.containers if c.state is ContainerState.RUNNING)

    def stop_container(self, container_id, grace_seconds):
        self.stop_calls.append((container_id, grace_seconds))
        error = self.stop_errors.get(container_id)
        if error is not None:
            raise error

    def ping(self):
        if self.ping_error is not None:
            raise self.ping_error
        return True

    @property
    def stopped_ids(self):
        return [container_id for container_id, _ in self.stop_calls]


class FakeHostShutdown:
    def __init__(self):
        self.requested = False
        self.calls = 0

    def request_shutdown(self):
        self.requested = True
        self.calls += 1


@pytest.fixture
def settings_factory():
    def factory(**overrides):
        values = {"DD_TRACE_ENABLED": False, "LOG_LEVEL": "WARNING"}
        values.update(overrides)
        return Settings(**values)
    return factory


@pytest.fixture
def host_shutdown():
    return FakeHostShutdown()


@pytest.fixture
def web_and_controller():
    return [
        make_record("a", "/web", image="nginx"),
        make_record("b", "/controller-1", image="simple-docker-controller:latest"),
    ]


@pytest.fixture
def client_factory(settings_factory, host_shutdown):
    def factory(runtime, **overrides):
        app = create_app(
            settings=settings_factory(**overrides),
            runtime=runtime,
            host_shutdown=host_shutdown,
        )
        return TestClient(app)
    return factory
