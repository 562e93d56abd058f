from core.settings import DEFAULT_DB_URL, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.db.url == DEFAULT_DB_URL
    assert settings.ui.page_size == 10
    assert settings.ui.app_name == "EduCRM"
    assert settings.log_level == "INFO"
    assert settings.seed_demo_data is True


def test_environment_overrides():
    settings = load_settings({
        "EDUCRM_DB_URL": "sqlite:///edu.db",
        "EDUCRM_PAGE_SIZE": "25",
        "EDUCRM_APP_NAME": "Academy",
        "EDUCRM_LOG_LEVEL": "debug",
        "EDUCRM_SEED_DEMO": "no",
    })
    assert settings.db.url == "sqlite:///edu.db"
    assert settings.ui.page_size == 25
    assert settings.ui.app_name == "Academy"
    assert settings.log_level == "DEBUG"
    assert settings.seed_demo_data is False


def test_bad_page_size_falls_back():
    assert load_settings({"EDUCRM_PAGE_SIZE": "ten"}).ui.page_size == 10
    assert load_settings({"EDUCRM_PAGE_SIZE": "0"}).ui.page_size == 10
