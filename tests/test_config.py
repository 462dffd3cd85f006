"""Tests for configuration loading."""

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from courtcal.config import (
    ConflictScanConfig,
    CourtCalConfig,
    FilterConfig,
    generate_config_toml,
    load_config,
)
from courtcal.config.validation import ConfigValidator
from courtcal.models import EventSource, EventStatus


class TestConfigLoad:
    def test_load_missing_file(self):
        with pytest.raises(FileNotFoundError, match="Run 'courtcal init'"):
            load_config(Path("/nonexistent/config.toml"))

    def test_load_valid_toml(self, tmp_path):
        config_path = tmp_path / "config.toml"
        config_path.write_text("""
[general]
timezone = "America/Chicago"
snapshot_path = "~/.courtcal/test.json"
location = "orl"

[locations]
orl = "ff344bbf-3e47-43b8-b3f7-49d38583970d"
TPA = "0a5b9f8e-0000-4000-8000-000000000001"

[filters]
sources = ["courtreserve", "tripleseat_event"]
statuses = ["confirmed"]
court_ids = ["court-1"]

[conflicts]
days = 7
max_days = 30

[exporters.stdout]
enabled = true
group_by = "court"
""")
        config = load_config(config_path)
        assert config.timezone == ZoneInfo("America/Chicago")
        assert config.snapshot_path == Path("~/.courtcal/test.json").expanduser()
        assert config.location_id() == "ff344bbf-3e47-43b8-b3f7-49d38583970d"
        assert config.location_id("tpa") == "0a5b9f8e-0000-4000-8000-000000000001"
        assert config.filters.sources == ["courtreserve", "tripleseat_event"]
        assert config.conflicts.days == 7
        assert config.conflicts.max_days == 30
        assert config.stdout.group_by == "court"

    def test_defaults_for_missing_sections(self, tmp_path):
        config_path = tmp_path / "config.toml"
        config_path.write_text("[general]\n")
        config = load_config(config_path)
        assert str(config.timezone) == "America/New_York"
        assert config.conflicts.days == 14
        assert config.conflicts.max_days == 60
        assert config.location_id() is None
        assert "cancelled" not in config.filters.statuses

    def test_unknown_timezone(self, tmp_path):
        config_path = tmp_path / "config.toml"
        config_path.write_text('[general]\ntimezone = "Mars/Olympus_Mons"\n')
        with pytest.raises(ValueError, match="Unknown timezone"):
            load_config(config_path)

    def test_invalid_values_reported_together(self, tmp_path):
        config_path = tmp_path / "config.toml"
        config_path.write_text("""
[filters]
sources = ["courtreserve", "fax"]

[conflicts]
days = 0
""")
        with pytest.raises(ValueError) as excinfo:
            load_config(config_path)
        message = str(excinfo.value)
        assert "filters.sources[1]" in message
        assert "conflicts.days" in message

    def test_generate_roundtrip(self, tmp_path):
        """Generate TOML from config, write it, read it back."""
        config = CourtCalConfig(
            snapshot_path=tmp_path / "snapshot.json",
            locations={"ORL": "ff344bbf-3e47-43b8-b3f7-49d38583970d"},
            filters=FilterConfig(statuses=["confirmed", "tentative"], court_ids=["court-2"]),
            conflicts=ConflictScanConfig(days=21, max_days=45),
        )
        config_path = tmp_path / "config.toml"
        config_path.write_text(generate_config_toml(config))

        loaded = load_config(config_path)
        assert loaded.snapshot_path == tmp_path / "snapshot.json"
        assert loaded.locations == {"ORL": "ff344bbf-3e47-43b8-b3f7-49d38583970d"}
        assert loaded.filters.statuses == ["confirmed", "tentative"]
        assert loaded.filters.court_ids == ["court-2"]
        assert loaded.conflicts.days == 21
        assert str(loaded.timezone) == "America/New_York"


class TestLocationLookup:
    def test_unknown_code(self):
        config = CourtCalConfig(locations={"ORL": "abc"})
        with pytest.raises(KeyError, match="Valid codes: ORL"):
            config.location_id("TPA")

    def test_no_locations_means_unscoped(self):
        assert CourtCalConfig().location_id("ANY") is None


class TestFilterConfig:
    def test_defaults_hide_cancelled(self):
        filters = FilterConfig().to_filters()
        assert filters.sources == frozenset(EventSource)
        assert EventStatus.CANCELLED not in filters.statuses
        assert filters.court_ids == frozenset()


class TestValidator:
    def setup_method(self):
        self.validator = ConfigValidator()

    def test_default_config_valid(self):
        assert self.validator.validate(CourtCalConfig()) == []

    def test_location_missing_from_locations(self):
        config = CourtCalConfig(location="TPA", locations={"ORL": "abc"})
        errors = self.validator.validate(config)
        assert [e.path for e in errors] == ["general.location"]

    def test_days_exceeds_max(self):
        config = CourtCalConfig(conflicts=ConflictScanConfig(days=90, max_days=60))
        errors = self.validator.validate(config)
        assert [e.path for e in errors] == ["conflicts.days"]

    def test_bad_status(self):
        config = CourtCalConfig(filters=FilterConfig(statuses=["maybe"]))
        errors = self.validator.validate(config)
        assert errors[0].path == "filters.statuses[0]"

    def test_bad_group_by(self):
        config = CourtCalConfig()
        config.stdout.group_by = "room"
        errors = self.validator.validate(config)
        assert [e.path for e in errors] == ["exporters.stdout.group_by"]

    def test_bool_is_not_a_day_count(self):
        config = CourtCalConfig(conflicts=ConflictScanConfig(days=True))
        errors = self.validator.validate(config)
        assert [e.path for e in errors] == ["conflicts.days"]
