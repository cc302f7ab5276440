"""
Configuration loader for parsing YAML reconciliation policy.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, FrozenSet

from .errors import ConfigurationError
from .models import ReconcileConfig, ShiftSlot


class ConfigLoader:
    """Loads and validates reconciliation configuration from YAML files."""

    # Class-level constants
    DAY_NAME_TO_INDEX = {
        "sunday": 0,
        "monday": 1,
        "tuesday": 2,
        "wednesday": 3,
        "thursday": 4,
        "friday": 5,
        "saturday": 6,
    }

    def __init__(self, config_path: str | Path):
        """
        Initialize the ConfigLoader with a configuration file path.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        self.config_path = Path(config_path)

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        self._raw_config: Dict[str, Any] | None = None
        self._config: ReconcileConfig | None = None

    def load(self) -> ReconcileConfig:
        """
        Load and parse the configuration file.

        Returns:
            ReconcileConfig object with all parsed data

        Raises:
            ConfigurationError: If configuration is invalid
        """
        with open(self.config_path, "r", encoding="utf-8") as f:
            self._raw_config = yaml.safe_load(f) or {}

        if not isinstance(self._raw_config, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping, got {type(self._raw_config).__name__}"
            )

        self._config = self._parse_config()
        return self._config

    def reload(self) -> ReconcileConfig:
        """
        Reload the configuration from the file.

        Useful if the file has been modified.
        """
        return self.load()

    @property
    def config(self) -> ReconcileConfig:
        """
        Get the loaded configuration.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    @property
    def raw_config(self) -> Dict[str, Any]:
        """
        Get the raw configuration dictionary.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        if self._raw_config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._raw_config

    def _parse_config(self) -> ReconcileConfig:
        """Parse raw YAML data into ReconcileConfig object."""
        raw = self._raw_config
        defaults = ReconcileConfig()

        locale = raw.get("locale") or {}
        day_names = tuple(str(n) for n in locale.get("day_names", defaults.day_names))

        shifts = raw.get("shifts") or {}
        cutoff = shifts.get("morning_cutoff_hour", defaults.morning_cutoff_hour)
        if not isinstance(cutoff, int) or isinstance(cutoff, bool):
            raise ConfigurationError(
                f"morning_cutoff_hour must be an integer hour, got: {cutoff!r}"
            )

        policy = raw.get("policy") or {}
        if "excluded_slots" in policy:
            excluded = self._parse_excluded_slots(policy.get("excluded_slots") or {})
        else:
            excluded = defaults.excluded_slots

        comparison = raw.get("comparison") or {}
        compare_employee = bool(comparison.get("compare_employee", False))

        try:
            return ReconcileConfig(
                day_names=day_names,
                morning_cutoff_hour=cutoff,
                excluded_slots=excluded,
                compare_employee=compare_employee,
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def _parse_excluded_slots(
        self, excluded_raw: Dict[str, Any]
    ) -> Dict[int, FrozenSet[ShiftSlot]]:
        """Parse excluded slots from day names to day indices."""
        excluded: Dict[int, FrozenSet[ShiftSlot]] = {}

        for day_name, slots in excluded_raw.items():
            day_index = self.DAY_NAME_TO_INDEX.get(str(day_name).lower())
            if day_index is None:
                raise ConfigurationError(
                    f"Invalid day name: '{day_name}'. "
                    f"Valid names: {', '.join(self.DAY_NAME_TO_INDEX.keys())}"
                )
            if isinstance(slots, str):
                slots = [slots]
            parsed = set()
            for slot in slots or []:
                try:
                    parsed.add(ShiftSlot(str(slot).lower()))
                except ValueError:
                    raise ConfigurationError(
                        f"Invalid shift slot '{slot}' for {day_name}. "
                        f"Valid slots: {', '.join(s.value for s in ShiftSlot)}"
                    ) from None
            excluded[day_index] = frozenset(parsed)

        return excluded

    def get_summary(self) -> str:
        """
        Get a summary of the loaded configuration.

        Raises:
            RuntimeError: If load() hasn't been called yet
        """
        config = self.config

        lines = [
            f"Configuration from: {self.config_path}",
            f"Morning cutoff: shifts starting before {config.morning_cutoff_hour:02d}:00",
            f"Compare employee identity: {'yes' if config.compare_employee else 'no'}",
            "Excluded slots:",
        ]

        for day_index in sorted(config.excluded_slots):
            slots = sorted(s.value for s in config.excluded_slots[day_index])
            if slots:
                lines.append(f"  - {config.day_name(day_index)}: {', '.join(slots)}")

        return "\n".join(lines)
