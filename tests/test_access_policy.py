"""Tests for the listing access gate and host shutdown request."""

import signal
from unittest import mock

import pytest

from infrastructure.lifecycle import HostShutdown
from services.access_policy import AccessPolicy, Operation
from services.errors import UnauthorizedError


class TestAccessPolicy:
    def test_listing_allowed(self, settings_factory):
        policy = AccessPolicy(settings_factory(ALLOW_LIST=True))

        assert policy.authorize(Operation.LIST_CONTAINERS) is True
        policy.require(Operation.LIST_CONTAINERS)

    def test_listing_refused(self, settings_factory):
        policy = AccessPolicy(settings_factory(ALLOW_LIST=False))

        assert policy.authorize(Operation.LIST_CONTAINERS) is False
        with pytest.raises(UnauthorizedError):
            policy.require(Operation.LIST_CONTAINERS)

    def test_only_listing_is_gated(self):
        assert list(Operation) == [Operation.LIST_CONTAINERS]


class TestHostShutdown:
    def test_sends_sigterm_to_own_process(self):
        with mock.patch("infrastructure.lifecycle.os.kill") as kill, \
                mock.patch("infrastructure.lifecycle.os.getpid", return_value=4321):
            HostShutdown().request_shutdown()

        kill.assert_called_once_with(4321, signal.SIGTERM)
