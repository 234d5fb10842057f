from mgrs2latlong.config import Settings, load_settings


def test_defaults():
    assert load_settings({}) == Settings()
    assert Settings().sample_rows == 100
    assert Settings().decimals is None


def test_env_overrides():
    s = load_settings({"MGRS_SAMPLE_ROWS": "25", "MGRS_DECIMALS": "6", "LOG_LEVEL": "debug", "ENABLE_JSON_LOGS": "1"})
    assert s.sample_rows == 25
    assert s.decimals == 6
    assert s.log_level == "DEBUG"
    assert s.json_logs is True


def test_bad_values_fall_back_to_defaults():
    s = load_settings({"MGRS_SAMPLE_ROWS": "lots", "MGRS_DECIMALS": "-2", "ENABLE_JSON_LOGS": "yes"})
    assert s.sample_rows == 100
    assert s.decimals is None
    assert s.json_logs is False
