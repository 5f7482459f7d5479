"""Tests for self container identification."""

from conftest import make_record
from models.container import ControllerIdentity
from services.self_identifier import find_candidates, identify


IDENTITY = ControllerIdentity(name_substring="controller", image_substring="simple-docker-controller")


class TestIdentify:
    """名前・イメージの部分文字列による自コンテナ識別"""

    def test_matches_by_name(self, web_and_controller):
        found = identify(tuple(web_and_controller), IDENTITY)

        assert found is not None
        assert found.id == "b"

    def test_matches_by_image_only(self):
        snapshot = (
            make_record("a", "/web", image="nginx"),
            make_record("c", "/renamed", image="registry.local/simple-docker-controller:1.2"),
        )

        assert identify(snapshot, IDENTITY).id == "c"

    def test_empty_snapshot_returns_none(self):
        assert identify((), IDENTITY) is None

    def test_no_match_returns_none(self):
        snapshot = (make_record("a", "/web", image="nginx"),)

        assert identify(snapshot, IDENTITY) is None

    def test_first_match_wins_in_runtime_order(self):
        snapshot = (
            make_record("x", "/controller-2", image="other"),
            make_record("y", "/controller-1", image="simple-docker-controller"),
        )

        assert identify(snapshot, IDENTITY).id == "x"
        assert [r.id for r in find_candidates(snapshot, IDENTITY)] == ["x", "y"]

    def test_matching_is_case_sensitive(self):
        snapshot = (make_record("a", "/Controller", image="Simple-Docker-Controller"),)

        assert identify(snapshot, IDENTITY) is None

    def test_empty_substrings_match_nothing(self):
        identity = ControllerIdentity(name_substring="", image_substring="")
        snapshot = (make_record("a", "/web", image="nginx"),)

        assert identify(snapshot, identity) is None

    def test_explicit_id_takes_precedence(self):
        snapshot = (
            make_record("aaa111", "/controller-1", image="simple-docker-controller"),
            make_record("bbb222", "/worker", image="python"),
        )
        identity = ControllerIdentity(
            name_substring="controller",
            image_substring="simple-docker-controller",
            container_id="bbb222",
        )

        assert identify(snapshot, identity).id == "bbb222"

    def test_explicit_short_id_matches_prefix(self):
        snapshot = (make_record("0123456789abcdef", "/worker", image="python"),)
        identity = ControllerIdentity(name_substring="", image_substring="", container_id="0123456789ab")

        assert identify(snapshot, identity).id == "0123456789abcdef"

    def test_explicit_id_prefix_shorter_than_short_id_is_ignored(self):
        snapshot = (
            make_record("abc0123456789", "/worker", image="python"),
            make_record("def0123456789", "/controller-1", image="simple-docker-controller"),
        )
        identity = ControllerIdentity(
            name_substring="controller",
            image_substring="simple-docker-controller",
            container_id="a",
        )

        assert identify(snapshot, identity).id == "def0123456789"

    def test_short_explicit_id_matches_exactly(self):
        snapshot = (make_record("a", "/worker", image="python"),)
        identity = ControllerIdentity(name_substring="", image_substring="", container_id="a")

        assert identify(snapshot, identity).id == "a"

    def test_unknown_explicit_id_falls_back_to_substring(self, web_and_controller):
        identity = ControllerIdentity(
            name_substring="controller",
            image_substring="simple-docker-controller",
            container_id="does-not-exist",
        )

        assert identify(tuple(web_and_controller), identity).id == "b"
