import pytest

from chmeta.core import AccessType, AdapterConfigurationError, ConnectionConfig
from chmeta.dialects import ClickHouseDialect
from chmeta.utils.messages import current_locale, format_message, set_locale


@pytest.fixture(autouse=True)
def reset_locale(monkeypatch):
    monkeypatch.delenv("CHMETA_LOCALE", raising=False)
    set_locale(None)
    yield
    set_locale(None)


def test_english_is_default():
    assert current_locale() == "en"
    assert format_message("unsupported_access_type", access_type="jndi") == (
        "Unsupported database access type [jndi]."
    )


def test_locale_from_environment(monkeypatch):
    monkeypatch.setenv("CHMETA_LOCALE", "zh_CN.UTF-8")
    assert current_locale() == "zh"
    assert format_message("unsupported_access_type", access_type="jndi") == "不支持的数据库连接方式[jndi]"


def test_unknown_locale_falls_back_to_english():
    set_locale("fr")
    assert current_locale() == "en"


def test_dialect_errors_follow_locale():
    set_locale("zh")
    dialect = ClickHouseDialect(ConnectionConfig(access_type=AccessType.NATIVE))
    with pytest.raises(AdapterConfigurationError, match="必须指定数据库名称"):
        dialect.build_url("localhost", "8123", "")
