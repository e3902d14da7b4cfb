"""Tests for discoverkit.resolver"""

import pytest
from discoverkit.resolver import NamespaceResolver


class TestMonorepoPatterns:
    def test_package_layout(self, resolver):
        name = resolver.resolve_from_file("/repo/packages/Billing/src/Cards/DashboardCard.py")
        assert name == "Billing.Cards.DashboardCard"

    def test_module_layout(self, resolver):
        name = resolver.resolve_from_file("/repo/modules/Blog/src/Models/Post.py")
        assert name == "modules.Blog.Models.Post"

    def test_app_layout(self, resolver):
        assert resolver.resolve_from_file("/repo/app/http/kernel.py") == "app.http.kernel"

    def test_package_init_maps_to_package(self, resolver):
        assert resolver.resolve_from_file("/repo/app/cards/__init__.py") == "app.cards"

    def test_packages_take_precedence_over_app(self, resolver):
        name = resolver.resolve_from_file("/repo/app/packages/billing/src/invoice.py")
        assert name == "billing.invoice"

    def test_last_app_segment_wins(self, resolver):
        name = resolver.resolve_from_file("/srv/app/project/app/cards/dashboard.py")
        assert name == "app.cards.dashboard"

    def test_custom_templates(self):
        resolver = NamespaceResolver(packages_namespace="acme.{package}", app_namespace="web")
        assert resolver.resolve_from_file("/repo/packages/billing/src/cards.py") == "acme.billing.cards"
        assert resolver.resolve_from_file("/repo/app/views.py") == "web.views"

    def test_custom_directories(self):
        resolver = NamespaceResolver(packages_dir="libs", app_dir="src")
        assert resolver.resolve_from_file("/repo/libs/core/src/models.py") == "core.models"
        assert resolver.resolve_from_file("/repo/src/main.py") == "app.main"

    def test_unknown_layout_returns_none(self, resolver):
        assert resolver.resolve_from_file("/repo/lib/thing.py") is None


class TestCustomPattern:
    def test_all_placeholders(self, resolver):
        name = resolver.resolve_from_file(
            "/repo/packages/billing/src/cards/dashboard.py",
            "acme.{package}.{namespace}.{class}",
        )
        assert name == "acme.billing.cards.dashboard"

    def test_nested_namespace(self, resolver):
        name = resolver.resolve_from_file(
            "/repo/modules/blog/src/http/controllers/posts.py",
            "mods.{module}.{namespace}.{class}",
        )
        assert name == "mods.blog.http.controllers.posts"

    def test_missing_namespace_segment_is_dropped(self, resolver):
        name = resolver.resolve_from_file(
            "/repo/packages/billing/src/dashboard.py",
            "acme.{package}.{namespace}.{class}",
        )
        assert name == "acme.billing.dashboard"

    def test_unresolved_placeholder_returns_none(self, resolver):
        assert resolver.resolve_from_file("/repo/app/views.py", "{module}.{class}") is None


class TestFailures:
    @pytest.mark.parametrize("path", [
        "/repo/app/my-cards/dashboard.py",
        "/repo/app/cards/2fa.py",
        "/repo/app/cards/readme.txt",
    ])
    def test_invalid_names_return_none(self, resolver, path):
        assert resolver.resolve_from_file(path) is None

    def test_malformed_input_returns_none(self, resolver):
        assert resolver.resolve_from_file(None) is None

    def test_real_fixture_file(self, resolver, project_dir):
        path = project_dir / "app" / "cards" / "dashboard.py"
        assert resolver.resolve_from_file(path) == "app.cards.dashboard"
