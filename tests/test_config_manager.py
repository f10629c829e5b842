"""
Unit tests for ConfigManager and the configuration dataclasses.
"""

import pytest
import json
import tempfile
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config.config_manager import (
    ConfigManager, AppConfig, AggregationRules, HolidaySettings, OutputSettings, Paths
)


class TestAggregationRules:
    """Tests for AggregationRules dataclass."""

    def test_default_values(self):
        """Test default counting rules."""
        rules = AggregationRules()

        assert rules.morning_count_exclusions == ["n1", "n2"]
        assert rules.overtime_colors == ["#ff0000", "#d32f2f"]
        assert rules.shift_pay_color == "#000000"
        assert rules.shift_pay_shift_ids == ["afternoon", "night"]
        assert rules.off_code == "O"

    def test_defaults_not_shared(self):
        """Each instance gets its own lists."""
        a = AggregationRules()
        b = AggregationRules()
        a.morning_count_exclusions.append("n3")

        assert b.morning_count_exclusions == ["n1", "n2"]


class TestOutputSettings:
    """Tests for OutputSettings dataclass."""

    def test_default_values(self):
        assert OutputSettings().filename_pattern == "ตารางเวร_{year}_{month}.xlsx"


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_load_default_config(self):
        """Test loading default config when file doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            manager = ConfigManager(config_path)
            config = manager.load()

            assert isinstance(config, AppConfig)
            assert config.admin.username == "admin"
            assert config.holidays.hidden_prefix == "ซ่อน: "

    def test_save_and_load_config(self):
        """Test saving and loading every section."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"

            manager = ConfigManager(config_path)
            manager.load()
            manager.update(
                paths=Paths(roster_csv="roster.csv", store_dir="data"),
                rules=AggregationRules(morning_count_exclusions=["n5"], off_code="OFF"),
                holidays=HolidaySettings(extra_lunar_holidays={2026: {"05-31": "วันวิสาขบูชา"}}),
                output_settings=OutputSettings(filename_pattern="schedule_{year}_{month}.xlsx")
            )

            manager2 = ConfigManager(config_path)
            config = manager2.load()

            assert config.paths.roster_csv == "roster.csv"
            assert config.paths.store_dir == "data"
            assert config.rules.morning_count_exclusions == ["n5"]
            assert config.rules.off_code == "OFF"
            assert config.rules.overtime_colors == ["#ff0000", "#d32f2f"]
            assert config.holidays.extra_lunar_holidays == {2026: {"05-31": "วันวิสาขบูชา"}}
            assert config.output_settings.filename_pattern == "schedule_{year}_{month}.xlsx"

    def test_thai_text_saved_unescaped(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            manager = ConfigManager(config_path)
            manager.load()
            manager.save()

            assert "ซ่อน" in config_path.read_text(encoding="utf-8")

    def test_partial_config(self):
        """Missing sections and keys fall back to defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            with open(config_path, 'w', encoding='utf-8') as f:
                json.dump({"admin": {"password": "secret"}}, f)

            config = ConfigManager(config_path).load()

            assert config.admin.username == "admin"
            assert config.admin.password == "secret"
            assert config.rules.shift_pay_color == "#000000"

    def test_malformed_config_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            config_path.write_text("{broken", encoding="utf-8")

            config = ConfigManager(config_path).load()

            assert config == AppConfig()
