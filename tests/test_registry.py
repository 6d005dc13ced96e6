"""Resource registry tests"""

import pytest

from sciadmin.config import Config
from sciadmin.enums import FormPolicy, ResponsePolicy
from sciadmin.errors import ConfigException
from sciadmin.registry import Registry


@pytest.fixture
def registry(config_file):
    return Registry.from_config(Config.load_from_file(str(config_file)))


def test_names(registry):
    assert registry.names() == ["institution", "study"]
    assert "study" in registry
    assert "device" not in registry


def test_binding_configuration(registry):
    study = registry.get("study")
    assert study.config.url == "http://api.example.com/api/study"
    assert study.config.id_key == "studyId"
    assert study.client.policy == ResponsePolicy.PERMISSIVE
    assert study.config.form_policy == FormPolicy.TOLERANT
    assert "staff" in study.schema

    institution = registry.get("institution")
    assert institution.client.policy == ResponsePolicy.STRICT
    assert institution.config.form_policy == FormPolicy.STRICT


def test_table_fields(registry):
    assert registry.table_fields("study") == ["title", "startDate"]
    assert registry.table_fields("institution") == ["title", "institutionType"]


def test_unknown_resource(registry):
    with pytest.raises(ConfigException, match="Unknown resource: device"):
        registry.get("device")
