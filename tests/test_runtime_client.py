"""Tests for the docker SDK adapter."""

from unittest import mock

from models.container import ContainerState
from repositories.runtime_client import DockerRuntimeClient, record_from_api


API_CONTAINERS = [
    {
        "Id": "a" * 64,
        "Names": ["/web"],
        "Image": "nginx:latest",
        "State": "running",
        "Status": "Up 2 hours",
        "Labels": {"com.example": "x"},
    },
    {
        "Id": "b" * 64,
        "Names": ["/controller-1"],
        "Image": "simple-docker-controller:latest",
        "State": "exited",
        "Status": "Exited (0) 3 minutes ago",
    },
]


class TestRecordFromApi:
    def test_maps_fields(self):
        record = record_from_api(API_CONTAINERS[0])

        assert record.id == "a" * 64
        assert record.names == ("/web",)
        assert record.image == "nginx:latest"
        assert record.state is ContainerState.RUNNING
        assert record.status == "Up 2 hours"

    def test_unknown_state_and_missing_names(self):
        record = record_from_api({"Id": "c", "Image": "x", "State": "hibernating", "Names": None})

        assert record.state is ContainerState.UNKNOWN
        assert record.names == ()
        assert record.primary_name is None


class TestDockerRuntimeClient:
    def test_client_is_created_lazily(self):
        with mock.patch("repositories.runtime_client.docker.DockerClient") as docker_client:
            runtime = DockerRuntimeClient("unix:///var/run/docker.sock")
            docker_client.assert_not_called()

            runtime.ping()

            docker_client.assert_called_once_with(base_url="unix:///var/run/docker.sock")

    def test_list_containers_preserves_order(self):
        client = mock.MagicMock()
        client.api.containers.return_value = API_CONTAINERS
        runtime = DockerRuntimeClient("unix:///var/run/docker.sock", client=client)

        snapshot = runtime.list_containers(include_all=True)

        client.api.containers.assert_called_once_with(all=True)
        assert [r.names[0] for r in snapshot] == ["/web", "/controller-1"]
        assert snapshot[1].state is ContainerState.EXITED

    def test_stop_container_passes_grace_period(self):
        client = mock.MagicMock()
        runtime = DockerRuntimeClient("unix:///var/run/docker.sock", client=client)

        runtime.stop_container("abc", 12)

        client.api.stop.assert_called_once_with("abc", timeout=12)

    def test_close_releases_client(self):
        client = mock.MagicMock()
        runtime = DockerRuntimeClient("unix:///var/run/docker.sock", client=client)

        runtime.close()
        runtime.close()

        client.close.assert_called_once_with()
