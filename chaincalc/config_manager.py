# config_manager.py
"""""
Loading and saving of the JSON files next to main.py.

- config.json     : user settings (darkmode, copy_result_on_equals, debug)
- ui_strings.json : text resources for the calculator core + settings descriptions

A missing or broken file is never fatal: the loaders return {} and the
calculator falls back to the defaults of CalculatorConfig.
"""""

import json
from dataclasses import dataclass, fields
from pathlib import Path

from . import error as E

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"

RESERVED_CHARACTERS = "0123456789+-eE()"


@dataclass(frozen=True)
class CalculatorConfig:
    """Text resources the calculator core works with.

    The host supplies these as opaque strings. Glyphs are matched literally,
    except the display glyphs for multiply/divide which are matched case-insensitively.
    """
    zero_text: str = "0"
    dot_glyph: str = "."
    multiply_canonical: str = "*"
    multiply_display: str = "×"
    divide_canonical: str = "/"
    divide_display: str = "÷"
    error_text: str = "Error"
    incomplete_expression_text: str = "Incomplete expression"

    def __post_init__(self):
        # Glyphs must not be mistaken for digits, signs, exponents or brackets,
        # and the dot / multiply / divide glyphs must be told apart.
        glyphs = {
            "dot_glyph": self.dot_glyph,
            "multiply_canonical": self.multiply_canonical,
            "multiply_display": self.multiply_display,
            "divide_canonical": self.divide_canonical,
            "divide_display": self.divide_display,
        }
        for key, glyph in glyphs.items():
            if any(ch in RESERVED_CHARACTERS or ch.isspace() for ch in glyph):
                raise E.ConfigurationError(f"Invalid text resource: {key}", code="5001")

        multiply = {self.multiply_canonical.lower(), self.multiply_display.lower()}
        divide = {self.divide_canonical.lower(), self.divide_display.lower()}
        if multiply & divide:
            raise E.ConfigurationError("Invalid text resource: divide_display", code="5001")
        if self.dot_glyph.lower() in multiply | divide:
            raise E.ConfigurationError("Invalid text resource: dot_glyph", code="5001")

    @classmethod
    def from_dict(cls, resources):
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in resources.items():
            if key not in known:
                continue
            if not isinstance(value, str) or value == "":
                raise E.ConfigurationError(f"Invalid text resource: {key}", code="5001")
            values[key] = value
        return cls(**values)


def _load_json(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def load_setting_value(key_value):
    settings_dict = _load_json(config_json)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, False)


def load_setting_description(key_value):
    settings_dict = _load_json(ui_strings).get("settings", {})

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, "")


def load_text_resources():
    """Return the CalculatorConfig described by ui_strings.json (defaults if absent)."""
    resources = _load_json(ui_strings).get("text_resources", {})
    return CalculatorConfig.from_dict(resources)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        return {}
