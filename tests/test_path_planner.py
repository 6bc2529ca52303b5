"""Tests for destination planning."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from docs_relocator.core.path_planner import MONTH_ABBREVIATIONS, plan_destination


class TestPlanDestination:
    """Test plan_destination."""

    def test_concrete_layout(self):
        """A March 2023 document lands in DOCS2023/Mar."""
        plan = plan_destination(Path("/share"), datetime(2023, 3, 14))

        assert plan.year_folder == "DOCS2023"
        assert plan.month_folder == "Mar"
        assert plan.year_dir == Path("/share/DOCS2023")
        assert plan.destination_dir == Path("/share/DOCS2023/Mar")
        assert plan.destination_path("abc.zip") == Path("/share/DOCS2023/Mar/abc.zip")

    @pytest.mark.parametrize("month,expected", list(enumerate(MONTH_ABBREVIATIONS, 1)))
    def test_every_month(self, month, expected):
        plan = plan_destination(Path("/share"), datetime(2020, month, 1))
        assert plan.month_folder == expected

    def test_custom_prefix(self):
        plan = plan_destination(Path("/share"), datetime(1999, 12, 31), prefix="ARCH")
        assert plan.year_folder == "ARCH1999"
        assert plan.month_folder == "Dec"

    def test_year_is_zero_padded(self):
        plan = plan_destination(Path("/share"), datetime(987, 1, 1))
        assert plan.year_folder == "DOCS0987"

    def test_uses_timestamp_fields_without_utc_conversion(self):
        """Late New Year's Eve in UTC-5 stays in December of the old year."""
        created = datetime(2022, 12, 31, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        plan = plan_destination(Path("/share"), created)

        assert plan.year_folder == "DOCS2022"
        assert plan.month_folder == "Dec"
