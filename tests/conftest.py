import pytest

TW_ENV = ("TW_PREFIX", "TW_VARIANTS", "TW_CUSTOM_UTILITIES", "TW_GROUP_ORDER", "TW_CONFIG", "TW_DEBUG")


@pytest.fixture(autouse=True)
def _clean_tw_env(monkeypatch):
    for name in TW_ENV:
        monkeypatch.delenv(name, raising=False)
