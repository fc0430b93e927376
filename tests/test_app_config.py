from utils.app_config import DEFAULTS, get_setting, get_smtp_settings, load_config, save_config


def test_missing_or_corrupt_config_is_empty(tmp_path):
    assert load_config(tmp_path / "none.json") == {}
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")
    assert load_config(bad) == {}


def test_save_then_load(tmp_path):
    path = tmp_path / "cfg" / "config.json"
    save_config({"date_format": "DD/MM/YYYY"}, path)
    assert load_config(path) == {"date_format": "DD/MM/YYYY"}
    assert not path.with_suffix(".tmp").exists()


def test_settings_fall_back_to_defaults():
    assert get_setting("date_format", {}) == DEFAULTS["date_format"]
    assert get_setting("date_format", {"date_format": "YYYY-MM-DD"}) == "YYYY-MM-DD"


def test_smtp_settings_merge_over_defaults():
    smtp = get_smtp_settings({"smtp": {"host": "mail.example.com"}})
    assert smtp["host"] == "mail.example.com"
    assert smtp["port"] == 587
    assert get_smtp_settings({})["host"] == ""


def test_smtp_port_is_coerced():
    assert get_smtp_settings({"smtp": {"port": "2525"}})["port"] == 2525
    assert get_smtp_settings({"smtp": {"port": "smtp"}})["port"] == 587
    assert get_smtp_settings({"smtp": {"port": None}})["port"] == 587
    assert get_smtp_settings({"smtp": {"port": 70000}})["port"] == 587
