import json

import pytest

from chaincalc import config_manager
from chaincalc import error as E
from chaincalc.config_manager import CalculatorConfig


@pytest.fixture
def project_files(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    strings_file = tmp_path / "ui_strings.json"
    monkeypatch.setattr(config_manager, "config_json", config_file)
    monkeypatch.setattr(config_manager, "ui_strings", strings_file)
    return config_file, strings_file


def test_missing_files_fall_back_to_defaults(project_files):
    assert config_manager.load_setting_value("all") == {}
    assert config_manager.load_setting_value("darkmode") is False
    assert config_manager.load_setting_description("all") == {}
    assert config_manager.load_text_resources() == CalculatorConfig()


def test_broken_json_falls_back_to_defaults(project_files):
    config_file, strings_file = project_files
    config_file.write_text("{not json", encoding="utf-8")
    strings_file.write_text("[", encoding="utf-8")
    assert config_manager.load_setting_value("all") == {}
    assert config_manager.load_text_resources() == CalculatorConfig()


def test_save_and_load_settings(project_files):
    saved = config_manager.save_setting({"darkmode": True, "debug": False})
    assert saved == {"darkmode": True, "debug": False}
    assert config_manager.load_setting_value("darkmode") is True
    assert config_manager.load_setting_value("all") == saved


def test_text_resources_and_descriptions(project_files):
    _, strings_file = project_files
    strings_file.write_text(json.dumps({
        "text_resources": {"dot_glyph": ",", "error_text": "Fehler", "unknown_key": "ignored"},
        "settings": {"darkmode": "Darkmode"},
    }), encoding="utf-8")

    config = config_manager.load_text_resources()
    assert config.dot_glyph == ","
    assert config.error_text == "Fehler"
    assert config.zero_text == "0"
    assert config_manager.load_setting_description("darkmode") == "Darkmode"
    assert config_manager.load_setting_description("debug") == ""


@pytest.mark.parametrize("value", ["", 5, None])
def test_invalid_text_resource_is_rejected(value):
    with pytest.raises(E.ConfigurationError) as exc_info:
        CalculatorConfig.from_dict({"dot_glyph": value})
    assert exc_info.value.code == "5001"


def test_shipped_files_are_valid():
    config = config_manager.load_text_resources()
    assert config == CalculatorConfig()
    settings = config_manager.load_setting_value("all")
    assert set(settings) == set(config_manager.load_setting_description("all"))


@pytest.mark.parametrize("resources", [
    {"dot_glyph": "e"},
    {"dot_glyph": "-"},
    {"multiply_display": "1"},
    {"divide_display": "+"},
    {"divide_display": " "},
    {"dot_glyph": "×"},
    {"multiply_display": "x", "divide_display": "X"},
    {"divide_display": "*"},
])
def test_colliding_glyphs_are_rejected(resources):
    with pytest.raises(E.ConfigurationError) as exc_info:
        CalculatorConfig.from_dict(resources)
    assert exc_info.value.code == "5001"


def test_distinct_glyphs_are_accepted():
    config = CalculatorConfig.from_dict({"dot_glyph": ",", "multiply_display": "x", "divide_display": ":"})
    assert config.multiply_display == "x"
