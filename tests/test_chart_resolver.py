"""Tests for ChartResolver."""

from __future__ import annotations

import pytest

from conftest import JX_URL, STABLE_URL
from helm_plan.core.chart_resolver import ChartResolver
from helm_plan.core.errors import VersionStreamError
from helm_plan.core.version_stream import VersionStream
from helm_plan.models.chart import ChartDetails


@pytest.fixture
def resolver(version_stream: VersionStream) -> ChartResolver:
    return ChartResolver(version_stream)


class TestChartDetails:
    def test_prefixed_name_uses_prefix_url(self, resolver: ChartResolver) -> None:
        details = resolver.chart_details("stable/velero", "")
        assert details == ChartDetails(
            name="stable/velero", local_name="velero", prefix="stable", repository=STABLE_URL,
        )

    def test_prefix_url_overrides_declared_repository(self, resolver: ChartResolver) -> None:
        details = resolver.chart_details("stable/velero", "https://example.com/charts")
        assert details.repository == STABLE_URL

    def test_unknown_prefix_keeps_repository(self, resolver: ChartResolver) -> None:
        details = resolver.chart_details("acme/widget", "https://acme.example.com")
        assert details.name == "acme/widget"
        assert details.prefix == "acme"
        assert details.repository == "https://acme.example.com"

    def test_name_qualified_with_prefix_for_url(self, resolver: ChartResolver) -> None:
        details = resolver.chart_details("lighthouse", JX_URL)
        assert details.name == "jenkins-x/lighthouse"
        assert details.local_name == "lighthouse"

    def test_empty_repository_falls_back_to_default_chart_repository(self, resolver: ChartResolver) -> None:
        details = resolver.chart_details("lighthouse", "")
        assert details.repository == JX_URL
        assert details.name == "jenkins-x/lighthouse"

    def test_team_default_apps_repository(self, version_stream: VersionStream) -> None:
        resolver = ChartResolver(version_stream, default_apps_repository=STABLE_URL)
        details = resolver.chart_details("velero", "")
        assert details.repository == STABLE_URL
        assert details.name == "stable/velero"

    def test_unregistered_url_has_no_prefix(self, resolver: ChartResolver) -> None:
        details = resolver.chart_details("widget", "https://acme.example.com")
        assert details == ChartDetails(
            name="widget", local_name="widget", prefix="", repository="https://acme.example.com",
        )

    def test_local_parent_directory(self, resolver: ChartResolver) -> None:
        details = resolver.chart_details("foo", "..")
        assert details.name == "../foo"
        assert details.repository == ""
        assert details.prefix == ".."

    def test_local_absolute_directory(self, resolver: ChartResolver) -> None:
        details = resolver.chart_details("foo", "/charts")
        assert details.name == "/charts/foo"
        assert details.repository == ""
        assert details.prefix == "/charts"

    def test_broken_prefix_table_raises(self, tmp_path) -> None:
        (tmp_path / "charts").mkdir()
        (tmp_path / "charts" / "repositories.yml").write_text("repositories: [unclosed\n")
        resolver = ChartResolver(VersionStream(tmp_path))
        with pytest.raises(VersionStreamError):
            resolver.chart_details("stable/velero", "")
