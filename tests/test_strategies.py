"""Tests for discoverkit.strategies"""

import pytest
from discoverkit.attributes import AttributeIndex, default_index
from discoverkit.exceptions import ConfigurationError, IndexUnavailableError
from discoverkit.strategies import (
    AttributeStrategy,
    DirectoryStrategy,
    InterfaceStrategy,
    MethodStrategy,
    ParentClassStrategy,
    PropertyStrategy,
)
from discoverkit.strategies.base import md5

from app.attributes import Card, Column, Route, Unused
from app.contracts import ServiceInterface
from app.services.base import BaseService

BILLING = "app.services.billing.BillingService"
INVOICE = "app.services.billing.InvoiceService"
HELPER = "app.services.billing.HelperService"
ABSTRACT = "app.services.base.AbstractService"


class BrokenIndex(AttributeIndex):
    def find_target_classes(self, attribute):
        raise RuntimeError("index corrupted")

    def find_target_methods(self, attribute):
        raise RuntimeError("index corrupted")

    def find_target_properties(self, attribute):
        raise RuntimeError("index corrupted")


class TestAttributeStrategy:
    def test_discover(self):
        strategy = AttributeStrategy(Card, default_index)
        classes = strategy.discover()
        assert "app.cards.dashboard.DashboardCard" in classes
        assert "app.cards.analytics.AnalyticsCard" in classes

    def test_metadata_has_attribute_instance(self):
        strategy = AttributeStrategy(Card, default_index)
        strategy.discover()
        metadata = strategy.get_metadata("app.cards.dashboard.DashboardCard")
        assert metadata['class'] == "app.cards.dashboard.DashboardCard"
        assert metadata['attribute'] == Card(enabled=True, priority=10)
        assert metadata['file'].endswith("dashboard.py")

    def test_metadata_before_discover_has_no_attribute(self):
        strategy = AttributeStrategy(Card, default_index)
        assert strategy.get_metadata("app.cards.dashboard.DashboardCard")['attribute'] is None

    def test_unused_attribute_is_empty(self):
        assert AttributeStrategy(Unused, default_index).discover() == []

    def test_missing_index_is_empty(self):
        assert AttributeStrategy(Card, None).discover() == []

    def test_failing_index_is_empty(self):
        assert AttributeStrategy(Card, BrokenIndex()).discover() == []

    def test_discover_is_idempotent(self):
        strategy = AttributeStrategy(Card, default_index)
        assert strategy.discover() == strategy.discover()

    def test_cache_key(self):
        assert AttributeStrategy(Card).get_cache_key() == "attribute:" + md5("app.attributes.Card")


class TestDirectoryStrategy:
    def test_discover_cards(self, resolver, project_dir):
        strategy = DirectoryStrategy("app/cards", resolver, project_dir)
        assert strategy.discover() == [
            "app.cards.analytics.AnalyticsCard",
            "app.cards.dashboard.DashboardCard",
        ]

    def test_absolute_directory(self, resolver, project_dir):
        strategy = DirectoryStrategy(str(project_dir / "app" / "cards"), resolver)
        assert len(strategy.discover()) == 2

    def test_glob_expansion(self, resolver, project_dir):
        strategy = DirectoryStrategy("app/c*", resolver, project_dir)
        directories = strategy.get_directories()
        assert [d.rsplit("/", 1)[-1] for d in directories] == ["cards", "controllers"]
        classes = strategy.discover()
        assert "app.controllers.user_controller.UserController" in classes
        assert "app.cards.dashboard.DashboardCard" in classes

    def test_missing_directory_is_empty(self, resolver, project_dir):
        strategy = DirectoryStrategy(["app/nowhere", "app/x*"], resolver, project_dir)
        assert strategy.get_directories() == []
        assert strategy.discover() == []

    def test_import_failures_are_skipped(self, resolver, project_dir):
        strategy = DirectoryStrategy("app/broken", resolver, project_dir)
        assert strategy.discover() == ["app.broken.fine.StillFound"]

    def test_unresolvable_files_are_skipped(self, resolver, tmp_path):
        lib = tmp_path / "lib"
        lib.mkdir()
        (lib / "thing.py").write_text("class Thing:\n    pass\n")
        strategy = DirectoryStrategy(str(lib), resolver)
        assert strategy.discover() == []

    def test_set_directories(self, resolver, project_dir):
        strategy = DirectoryStrategy("app/cards", resolver, project_dir)
        key = strategy.get_cache_key()
        strategy.set_directories(["app/settings"])
        assert strategy.discover() == ["app.settings.app_settings.AppSettings"]
        assert strategy.get_cache_key() != key

    def test_namespace_pattern(self, resolver, project_dir):
        strategy = DirectoryStrategy("app/cards", resolver, project_dir)
        strategy.set_namespace_pattern("nonexistent.{class}")
        assert strategy.discover() == []

    def test_metadata(self, resolver, project_dir):
        strategy = DirectoryStrategy("app/cards", resolver, project_dir, default_index)
        metadata = strategy.get_metadata("app.cards.dashboard.DashboardCard")
        assert metadata['file'].endswith("dashboard.py")
        assert metadata['attribute'] == Card(enabled=True, priority=10)
        assert metadata['attributes'] == [Card(enabled=True, priority=10)]

    def test_metadata_without_index(self, resolver, project_dir):
        strategy = DirectoryStrategy("app/cards", resolver, project_dir)
        assert strategy.get_metadata("app.cards.dashboard.DashboardCard")['attribute'] is None

    def test_cache_key(self, resolver):
        strategy = DirectoryStrategy(["a", "b"], resolver)
        assert strategy.get_cache_key() == "directory:" + md5('["a", "b"]')


class TestInterfaceStrategy:
    def test_global_discovery(self):
        classes = InterfaceStrategy(ServiceInterface).discover()
        assert BILLING in classes
        assert INVOICE in classes
        assert ABSTRACT in classes
        assert "app.contracts.CacheableInterface" in classes
        assert "app.contracts.ServiceInterface" not in classes
        assert HELPER not in classes

    def test_by_name(self):
        assert BILLING in InterfaceStrategy("app.contracts.ServiceInterface").discover()

    def test_directory_mode(self, factory):
        strategy = InterfaceStrategy(ServiceInterface, factory)
        strategy.directories("app/services")
        assert strategy.discover() == [ABSTRACT, BILLING, INVOICE]

    def test_directory_mode_requires_factory(self):
        with pytest.raises(ConfigurationError):
            InterfaceStrategy(ServiceInterface).directories("app/services")

    def test_unknown_interface_is_empty(self):
        assert InterfaceStrategy("app.contracts.MissingInterface").discover() == []

    def test_global_discovery_idempotent(self):
        strategy = InterfaceStrategy(ServiceInterface)
        assert set(strategy.discover()) == set(strategy.discover())

    def test_metadata_and_cache_key(self):
        strategy = InterfaceStrategy(ServiceInterface)
        assert strategy.get_metadata(BILLING) == {
            'class': BILLING,
            'interface': "app.contracts.ServiceInterface",
        }
        assert strategy.get_cache_key() == "interface:" + md5("app.contracts.ServiceInterface")


class TestParentClassStrategy:
    def test_global_discovery(self):
        classes = ParentClassStrategy(BaseService).discover()
        assert set([ABSTRACT, BILLING, INVOICE, HELPER]) <= set(classes)
        assert "app.services.base.BaseService" not in classes

    def test_directory_mode(self, factory):
        strategy = ParentClassStrategy(BaseService, factory)
        strategy.directories(["app/services"])
        assert strategy.discover() == [ABSTRACT, BILLING, INVOICE, HELPER]

    def test_directory_mode_requires_factory(self):
        with pytest.raises(ConfigurationError):
            ParentClassStrategy(BaseService).directories("app/services")

    def test_unknown_parent_is_empty(self):
        assert ParentClassStrategy("nowhere.Base").discover() == []

    def test_metadata_and_cache_key(self):
        strategy = ParentClassStrategy(BaseService)
        assert strategy.get_metadata(HELPER)['parent'] == "app.services.base.BaseService"
        assert strategy.get_cache_key().startswith("parent:")

    def test_directory_mode_changes_cache_key(self, factory):
        strategy = ParentClassStrategy(BaseService, factory)
        global_key = strategy.get_cache_key()
        assert global_key == "parent:" + md5("app.services.base.BaseService")

        strategy.directories("app/services")
        services_key = strategy.get_cache_key()
        strategy.directories("app/cards")
        assert services_key.startswith(global_key + ":directory:")
        assert strategy.get_cache_key() != services_key


class TestMethodStrategy:
    def test_discover(self):
        methods = MethodStrategy(Route, default_index).discover()
        assert set(methods) == {
            "app.controllers.admin_controller.AdminController::dashboard",
            "app.controllers.admin_controller.AdminController::flush",
            "app.controllers.user_controller.UserController::index",
            "app.controllers.user_controller.UserController::store",
        }

    def test_metadata(self):
        strategy = MethodStrategy(Route, default_index)
        metadata = strategy.get_metadata("app.controllers.user_controller.UserController::store")
        assert metadata['class'] == "app.controllers.user_controller.UserController"
        assert metadata['name'] == "store"
        assert metadata['attribute'] == Route(method='POST', path='/users')
        assert metadata['attribute_class'] == "app.attributes.Route"

    def test_metadata_for_unknown_method(self):
        metadata = MethodStrategy(Route, default_index).get_metadata("x.Y::z")
        assert metadata['attribute'] is None

    def test_missing_index_raises(self):
        with pytest.raises(IndexUnavailableError):
            MethodStrategy(Route, None).discover()

    def test_failing_index_is_empty(self):
        assert MethodStrategy(Route, BrokenIndex()).discover() == []

    def test_unused_attribute_is_empty(self):
        assert MethodStrategy(Unused, default_index).discover() == []

    def test_cache_key(self):
        assert MethodStrategy(Route).get_cache_key() == "method:" + md5("app.attributes.Route")


class TestPropertyStrategy:
    def test_discover(self):
        assert PropertyStrategy(Column, default_index).discover() == [
            "app.settings.app_settings.AppSettings::$site_name",
            "app.settings.app_settings.AppSettings::$timezone",
        ]

    def test_metadata(self):
        strategy = PropertyStrategy(Column, default_index)
        metadata = strategy.get_metadata("app.settings.app_settings.AppSettings::$timezone")
        assert metadata['property'] == "app.settings.app_settings.AppSettings::$timezone"
        assert metadata['name'] == "timezone"
        assert metadata['attribute'] == Column(name='timezone', nullable=True)

    def test_missing_index_raises(self):
        with pytest.raises(IndexUnavailableError):
            PropertyStrategy(Column, None).discover()

    def test_failing_index_is_empty(self):
        assert PropertyStrategy(Column, BrokenIndex()).discover() == []

    def test_cache_key(self):
        assert PropertyStrategy(Column).get_cache_key() == "property:" + md5("app.attributes.Column")
