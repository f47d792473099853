"""settings.yaml loading into UnifiedConfig / RateTable."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import textwrap

import pytest

from foster_allowance.config.loader import load_unified_config, parse_experience, parse_rate_table
from foster_allowance.core.errors import ConfigurationError

REPO = Path(__file__).resolve().parents[1]

BASE = """
household:
  name: Sam Carer
  email: sam@example.com
  experienced_carer: true
paths:
  inputs_dir: inputs
  data_dir: data
  reports_dir: reports
rates:
  "0-4":
    standard: 175.00
    special_care: 262.50
  "5-10":
    standard: 199
"""


def write_settings(root: Path, text: str) -> Path:
    (root / "config").mkdir()
    (root / "config" / "settings.yaml").write_text(textwrap.dedent(text), encoding="utf-8")
    return root


def test_loads_household_paths_and_rates(tmp_path):
    cfg = load_unified_config(write_settings(tmp_path, BASE))

    assert cfg.household.name == "Sam Carer"
    assert cfg.household.email == "sam@example.com"
    assert cfg.household.phone == ""
    assert cfg.household.context().is_experienced_carer is True
    assert cfg.paths.inputs_dir == (tmp_path / "inputs").resolve()
    assert cfg.paths.config_dir == (tmp_path / "config").resolve()
    assert cfg.rates.lookup("0-4", False) == Decimal("175.00")
    assert cfg.rates.lookup("0-4", True) == Decimal("262.50")
    assert cfg.rates.lookup("5-10", False) == Decimal("199")


def test_defaults_for_optional_sections(tmp_path):
    cfg = load_unified_config(write_settings(tmp_path, BASE))

    assert cfg.options.submission_status == "submitted"
    assert cfg.report.currency_symbol == "£"
    assert cfg.report.decimal_places == 2
    assert cfg.rates.experience.kind == "multiplier"
    assert cfg.rates.experience.value == Decimal("1")


def test_unset_special_care_rate_is_not_defaulted(tmp_path):
    cfg = load_unified_config(write_settings(tmp_path, BASE))
    with pytest.raises(ConfigurationError):
        cfg.rates.lookup("5-10", True)


def test_yaml_floats_become_exact_decimals(tmp_path):
    text = BASE + "experience:\n  kind: multiplier\n  value: 1.1\n"
    cfg = load_unified_config(write_settings(tmp_path, text))
    assert cfg.rates.experience.value == Decimal("1.1")


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_unified_config(tmp_path)


@pytest.mark.parametrize("section", ["household", "paths", "rates"])
def test_missing_required_section(tmp_path, section):
    import yaml

    data = yaml.safe_load(BASE)
    del data[section]
    with pytest.raises(KeyError, match=section):
        load_unified_config(write_settings(tmp_path, yaml.safe_dump(data)))


def test_bad_rate_value():
    with pytest.raises(ConfigurationError, match="rates.0-4.standard"):
        parse_rate_table({"0-4": {"standard": "lots"}})


def test_bracket_must_be_a_mapping():
    with pytest.raises(ConfigurationError):
        parse_rate_table({"0-4": 175})


def test_empty_rates_rejected():
    with pytest.raises(ConfigurationError):
        parse_rate_table({})


def test_experience_kinds():
    assert parse_experience({"kind": "additive", "value": 20}).value == Decimal("20")
    assert parse_experience({"kind": "additive"}).value == Decimal("0")
    assert parse_experience(None).kind == "multiplier"
    with pytest.raises(ConfigurationError):
        parse_experience({"kind": "bonus", "value": 5})


@pytest.mark.parametrize(
    "raw,expected",
    [("false", False), ('"false"', False), ('"no"', False), ("true", True), ('"yes"', True)],
)
def test_experienced_carer_flag(tmp_path, raw, expected):
    text = BASE.replace("experienced_carer: true", f"experienced_carer: {raw}")
    cfg = load_unified_config(write_settings(tmp_path, text))
    assert cfg.household.is_experienced_carer is expected


@pytest.mark.parametrize("raw", ['"sometimes"', "2", "[true]"])
def test_experienced_carer_flag_rejects_non_booleans(tmp_path, raw):
    text = BASE.replace("experienced_carer: true", f"experienced_carer: {raw}")
    with pytest.raises(ConfigurationError, match="household.experienced_carer"):
        load_unified_config(write_settings(tmp_path, text))


@pytest.mark.parametrize("amount", [0, -175])
def test_non_positive_rate_rejected(amount):
    with pytest.raises(ConfigurationError, match="must be positive"):
        parse_rate_table({"0-4": {"standard": 175, "special_care": amount}})


@pytest.mark.parametrize(
    "section",
    [{"kind": "multiplier", "value": 0}, {"kind": "multiplier", "value": -1.1},
     {"kind": "additive", "value": -5}],
)
def test_bad_experience_value_rejected(section):
    with pytest.raises(ConfigurationError, match="experience.value"):
        parse_experience(section)


def test_shipped_settings_template_loads():
    cfg = load_unified_config(REPO)
    for age_group in ("0-4", "5-10", "11-15", "16-17"):
        assert cfg.rates.lookup(age_group, False) > 0
        assert cfg.rates.lookup(age_group, True) > cfg.rates.lookup(age_group, False)
