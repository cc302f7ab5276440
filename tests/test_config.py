"""Tests for configuration loading and validation."""

import pytest
import tempfile
from pathlib import Path

from shift_reconcile.config import ConfigLoader
from shift_reconcile.errors import ConfigurationError
from shift_reconcile.models import ReconcileConfig, ShiftSlot


def write_yaml(content: str) -> Path:
    """Write YAML content to a temporary file and return the path."""
    f = tempfile.NamedTemporaryFile(
        mode="w", suffix=".yaml", delete=False, encoding="utf-8"
    )
    f.write(content)
    f.close()
    return Path(f.name)


class TestConfigLoaderBasics:
    """Basic config loading tests."""

    def test_file_not_found_raises_error(self):
        """Loading non-existent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConfigLoader("/nonexistent/path.yaml")

    def test_empty_file_gives_defaults(self):
        """All keys are optional."""
        config = ConfigLoader(write_yaml("")).load()
        assert config == ReconcileConfig()

    def test_load_full_config(self):
        yaml = """
locale:
  day_names: [ראשון, שני, שלישי, רביעי, חמישי, שישי, שבת]

shifts:
  morning_cutoff_hour: 11

policy:
  excluded_slots:
    saturday: [morning, evening]

comparison:
  compare_employee: true
"""
        config = ConfigLoader(write_yaml(yaml)).load()

        assert config.day_names[0] == "ראשון"
        assert config.morning_cutoff_hour == 11
        assert config.compare_employee is True
        assert config.excluded_slots == {6: frozenset({ShiftSlot.MORNING, ShiftSlot.EVENING})}
        # Friday evening no longer excluded once the policy is overridden
        assert not config.is_excluded(5, ShiftSlot.EVENING)

    def test_project_config_file_loads(self):
        path = Path(__file__).resolve().parent.parent / "config" / "reconcile.yaml"
        assert ConfigLoader(path).load() == ReconcileConfig()

    def test_config_before_load_raises(self):
        loader = ConfigLoader(write_yaml(""))
        with pytest.raises(RuntimeError, match="not loaded"):
            _ = loader.config
        with pytest.raises(RuntimeError, match="not loaded"):
            _ = loader.raw_config

    def test_reload_picks_up_changes(self):
        path = write_yaml("shifts:\n  morning_cutoff_hour: 10\n")
        loader = ConfigLoader(path)
        assert loader.load().morning_cutoff_hour == 10

        path.write_text("shifts:\n  morning_cutoff_hour: 9\n", encoding="utf-8")
        assert loader.reload().morning_cutoff_hour == 9


class TestExcludedSlots:
    """Tests for day name and slot parsing."""

    @pytest.mark.parametrize(
        "day_name,expected_index",
        [
            ("sunday", 0),
            ("Monday", 1),
            ("FRIDAY", 5),
            ("saturday", 6),
        ],
    )
    def test_day_names_case_insensitive(self, day_name: str, expected_index: int):
        yaml = f"policy:\n  excluded_slots:\n    {day_name}: [evening]\n"
        config = ConfigLoader(write_yaml(yaml)).load()
        assert config.is_excluded(expected_index, ShiftSlot.EVENING)

    def test_single_slot_string(self):
        yaml = "policy:\n  excluded_slots:\n    friday: evening\n"
        config = ConfigLoader(write_yaml(yaml)).load()
        assert config.excluded_slots == {5: frozenset({ShiftSlot.EVENING})}

    def test_invalid_day_name_raises(self):
        yaml = "policy:\n  excluded_slots:\n    funday: [evening]\n"
        with pytest.raises(ConfigurationError, match="Invalid day name"):
            ConfigLoader(write_yaml(yaml)).load()

    def test_invalid_slot_raises(self):
        yaml = "policy:\n  excluded_slots:\n    friday: [night]\n"
        with pytest.raises(ConfigurationError, match="Invalid shift slot"):
            ConfigLoader(write_yaml(yaml)).load()

    def test_empty_policy_disables_exclusions(self):
        yaml = "policy:\n  excluded_slots: {}\n"
        config = ConfigLoader(write_yaml(yaml)).load()
        assert not config.is_excluded(6, ShiftSlot.MORNING)


class TestValidation:
    """Tests for invalid values."""

    @pytest.mark.parametrize("cutoff", ["noon", 24, -1, 12.5])
    def test_invalid_cutoff_raises(self, cutoff):
        yaml = f"shifts:\n  morning_cutoff_hour: {cutoff}\n"
        with pytest.raises(ConfigurationError):
            ConfigLoader(write_yaml(yaml)).load()

    def test_wrong_number_of_day_names_raises(self):
        yaml = "locale:\n  day_names: [Sun, Mon]\n"
        with pytest.raises(ConfigurationError, match="exactly 7"):
            ConfigLoader(write_yaml(yaml)).load()

    def test_non_mapping_root_raises(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigLoader(write_yaml("- a\n- b\n")).load()


class TestSummary:
    """Tests for the human-readable summary."""

    def test_summary_lists_exclusions(self):
        loader = ConfigLoader(write_yaml(""))
        loader.load()
        summary = loader.get_summary()

        assert "before 12:00" in summary
        assert "Friday: evening" in summary
        assert "Saturday: evening, morning" in summary
