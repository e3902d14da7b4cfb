"""Tests for discoverkit.models"""

import pytest
from discoverkit.models import TargetMethod, TargetProperty, WarmupReport, split_member


class TestTargets:
    def test_method_identifier(self):
        target = TargetMethod(attribute=None, class_name='app.Controller', name='index')
        assert target.identifier == 'app.Controller::index'

    def test_property_identifier(self):
        target = TargetProperty(attribute=None, class_name='app.Settings', name='timezone')
        assert target.identifier == 'app.Settings::$timezone'

    def test_targets_are_frozen(self):
        target = TargetMethod(attribute=None, class_name='app.Controller', name='index')
        with pytest.raises(AttributeError):
            target.name = 'store'


class TestSplitMember:
    @pytest.mark.parametrize("identifier,expected", [
        ('app.Controller::index', ['app.Controller', 'index']),
        ('app.Settings::$timezone', ['app.Settings', 'timezone']),
        ('app.Plain', ['app.Plain', '']),
    ])
    def test_split(self, identifier, expected):
        assert split_member(identifier) == expected


class TestWarmupReport:
    def test_to_dict(self):
        report = WarmupReport(total_paths=3, cached=1, skipped=1, failed=1, classes_discovered=4)
        assert report.to_dict() == {
            'Total Paths': 3,
            'Cached': 1,
            'Skipped': 1,
            'Failed': 1,
            'Classes Discovered': 4,
        }

    def test_failures_not_shared(self):
        a, b = WarmupReport(), WarmupReport()
        a.failures['x'] = 'boom'
        assert b.failures == {}
