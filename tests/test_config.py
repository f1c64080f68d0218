import pytest

from treewalker.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DEFAULT_TREE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    settings = Settings()
    assert settings.default_tree == "car"
    assert settings.log_level == "WARNING"


def test_bot_token_is_required_only_on_demand(monkeypatch):
    monkeypatch.delenv("BOT_TOKEN", raising=False)
    settings = Settings()
    with pytest.raises(RuntimeError, match="BOT_TOKEN"):
        settings.require_bot_token()
    assert Settings(bot_token="123:abc").require_bot_token() == "123:abc"


def test_dispatcher_includes_routers():
    from treewalker.bot import dp

    assert [router.name for router in dp.sub_routers] == ["start", "walk"]


def test_unknown_log_level_falls_back_to_warning(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    assert Settings().log_level == "WARNING"
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    assert Settings().log_level == "DEBUG"
