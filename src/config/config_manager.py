"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Provides bi-directional mapping between the config dataclasses and JSON.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")


@dataclass
class Paths:
    """File paths configuration."""
    roster_csv: str = ""    # Empty = built-in roster
    store_dir: str = ""     # Empty = <project root>/data
    log_file: str = ""      # Empty = <project root>/app.log
    export_dir: str = ""    # Empty = project root


@dataclass
class AdminCredentials:
    """Admin login record. Compared as plaintext."""
    username: str = "admin"
    password: str = "admin123"


@dataclass
class AggregationRules:
    """
    Rules used when counting shifts.

    Attributes:
        morning_count_exclusions: Staff ids not counted for a plain morning shift
        overtime_colors: Text colors that mark an overtime shift
        shift_pay_color: Text color of a shift eligible for shift pay
        shift_pay_shift_ids: Shift ids eligible for shift pay
        off_code: Rendered text of the Off marker, never counted
    """
    morning_count_exclusions: List[str] = field(default_factory=lambda: ["n1", "n2"])
    overtime_colors: List[str] = field(default_factory=lambda: ["#ff0000", "#d32f2f"])
    shift_pay_color: str = "#000000"
    shift_pay_shift_ids: List[str] = field(default_factory=lambda: ["afternoon", "night"])
    off_code: str = "O"


@dataclass
class HolidaySettings:
    """Holiday settings."""
    hidden_prefix: str = "ซ่อน: "
    # year -> {"MM-DD": name}, merged over the built-in lunar table
    extra_lunar_holidays: Dict[int, Dict[str, str]] = field(default_factory=dict)


@dataclass
class OutputSettings:
    """Output settings for the exported workbook."""
    filename_pattern: str = "ตารางเวร_{year}_{month}.xlsx"


@dataclass
class AppConfig:
    """Main application configuration container."""
    paths: Paths = field(default_factory=Paths)
    admin: AdminCredentials = field(default_factory=AdminCredentials)
    rules: AggregationRules = field(default_factory=AggregationRules)
    holidays: HolidaySettings = field(default_factory=HolidaySettings)
    output_settings: OutputSettings = field(default_factory=OutputSettings)


class ConfigManager:
    """
    Manages application configuration with JSON persistence.

    Responsibilities:
    - Load configuration from JSON file
    - Save configuration to JSON file
    - Provide default configuration
    - Convert between dataclass and dict representations
    """

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.json"

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Failed to load config {self.config_path}, using defaults: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = self._config_to_dict(self._config)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def update(self, **kwargs) -> None:
        """Update specific configuration sections."""
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
        self.save()

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "paths": {
                "roster_csv": config.paths.roster_csv,
                "store_dir": config.paths.store_dir,
                "log_file": config.paths.log_file,
                "export_dir": config.paths.export_dir
            },
            "admin": {
                "username": config.admin.username,
                "password": config.admin.password
            },
            "rules": {
                "morning_count_exclusions": list(config.rules.morning_count_exclusions),
                "overtime_colors": list(config.rules.overtime_colors),
                "shift_pay_color": config.rules.shift_pay_color,
                "shift_pay_shift_ids": list(config.rules.shift_pay_shift_ids),
                "off_code": config.rules.off_code
            },
            "holidays": {
                "hidden_prefix": config.holidays.hidden_prefix,
                "extra_lunar_holidays": {
                    str(year): dict(table)
                    for year, table in config.holidays.extra_lunar_holidays.items()
                }
            },
            "output_settings": {
                "filename_pattern": config.output_settings.filename_pattern
            }
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        paths_data = data.get("paths", {})
        admin_data = data.get("admin", {})
        rules_data = data.get("rules", {})
        holidays_data = data.get("holidays", {})
        output_settings_data = data.get("output_settings", {})

        defaults = AggregationRules()

        paths = Paths(
            roster_csv=paths_data.get("roster_csv", ""),
            store_dir=paths_data.get("store_dir", ""),
            log_file=paths_data.get("log_file", ""),
            export_dir=paths_data.get("export_dir", "")
        )

        admin = AdminCredentials(
            username=admin_data.get("username", "admin"),
            password=admin_data.get("password", "admin123")
        )

        rules = AggregationRules(
            morning_count_exclusions=list(
                rules_data.get("morning_count_exclusions", defaults.morning_count_exclusions)
            ),
            overtime_colors=list(rules_data.get("overtime_colors", defaults.overtime_colors)),
            shift_pay_color=rules_data.get("shift_pay_color", defaults.shift_pay_color),
            shift_pay_shift_ids=list(
                rules_data.get("shift_pay_shift_ids", defaults.shift_pay_shift_ids)
            ),
            off_code=rules_data.get("off_code", defaults.off_code)
        )

        # JSON object keys are strings
        holidays = HolidaySettings(
            hidden_prefix=holidays_data.get("hidden_prefix", "ซ่อน: "),
            extra_lunar_holidays={
                int(year): dict(table)
                for year, table in holidays_data.get("extra_lunar_holidays", {}).items()
            }
        )

        output_settings = OutputSettings(
            filename_pattern=output_settings_data.get(
                "filename_pattern", "ตารางเวร_{year}_{month}.xlsx"
            )
        )

        return AppConfig(
            paths=paths,
            admin=admin,
            rules=rules,
            holidays=holidays,
            output_settings=output_settings
        )
