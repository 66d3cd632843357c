import pytest

from mongotrace import config as global_config
from mongotrace.settings import Config
from mongotrace.settings import IntegrationConfig
from tests.utils import override_config
from tests.utils import override_env


def test_integration_config_access():
    config = Config()
    config._add("mongodb", dict(enhanced_database_reporting=False))

    assert isinstance(config.mongodb, IntegrationConfig)
    assert config.mongodb.integration_name == "mongodb"
    assert config.mongodb.global_config is config
    assert config.mongodb["enhanced_database_reporting"] is False

    config.mongodb.enhanced_database_reporting = True
    assert config.mongodb["enhanced_database_reporting"] is True


def test_integration_config_before_add():
    config = Config()
    assert isinstance(config.mongodb, IntegrationConfig)
    assert "enhanced_database_reporting" not in config.mongodb


def test_add_merge_keeps_user_settings():
    config = Config()
    config.mongodb["enhanced_database_reporting"] = True
    config._add("mongodb", dict(enhanced_database_reporting=False, extra={"a": 1}))

    assert config.mongodb.enhanced_database_reporting is True
    assert config.mongodb.extra == {"a": 1}


def test_add_overwrite():
    config = Config()
    config.mongodb["enhanced_database_reporting"] = True
    config._add("mongodb", dict(enhanced_database_reporting=False), merge=False)

    assert config.mongodb.enhanced_database_reporting is False


def test_add_copies_defaults():
    config = Config()
    defaults = dict(nested={"a": 1})
    config._add("mongodb", defaults)
    config.mongodb.nested["a"] = 2

    assert defaults == dict(nested={"a": 1})


def test_add_unknown_integration(caplog):
    config = Config()
    config._add("notadriver", dict(a=1))

    assert "notadriver not found in INTEGRATION_CONFIGS" in caplog.text
    with pytest.raises(AttributeError):
        config.notadriver


def test_global_settings_from_env():
    with override_env(dict(MONGOTRACE_TRACE_SAFE_INSTRUMENTATION_ENABLED="1")):
        config = Config()

    assert config._trace_safe_instrumentation_enabled is True


def test_global_settings_defaults():
    with override_env(dict(MONGOTRACE_TRACE_SAFE_INSTRUMENTATION_ENABLED="no")):
        config = Config()

    assert config._trace_safe_instrumentation_enabled is False


def test_mongodb_defaults():
    import mongotrace.contrib.mongodb  # noqa: F401

    assert global_config.mongodb.enhanced_database_reporting is False
    with override_config("mongodb", dict(enhanced_database_reporting=True)):
        assert global_config.mongodb.enhanced_database_reporting is True
    assert global_config.mongodb.enhanced_database_reporting is False


def test_repr():
    config = Config()
    config._add("mongodb", dict(enhanced_database_reporting=False))

    assert "integration_configs=mongodb" in repr(config)
    assert "enhanced_database_reporting" in repr(config.mongodb)
