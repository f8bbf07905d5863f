"""Tests for commission forecasting."""

from datetime import date

import pytest

from commission_analytics.reporting.forecast import (
    confidence_label,
    forecast_commissions,
    project_month,
    trailing_monthly_average,
)


class TestForecastCommissions:
    """Tests for forecast_commissions."""

    def test_linear_month_projection(self, make_commission):
        """50K by day 10 of a 30-day month projects to 150K."""
        records = [make_commission(amount=50000, created_at="2024-06-05T12:00:00")]

        forecast = forecast_commissions(records, date(2024, 6, 10))

        assert forecast.current_month == 50000
        assert forecast.projected_month == pytest.approx(150000)

    def test_quarter_and_year_projection(self, make_commission):
        records = [
            make_commission(amount=30000, created_at="2024-04-20T12:00:00"),
            make_commission(amount=30000, created_at="2024-05-02T12:00:00"),
            make_commission(amount=60000, created_at="2024-01-15T12:00:00"),
            make_commission(amount=99999, created_at="2023-05-02T12:00:00"),
        ]

        forecast = forecast_commissions(records, date(2024, 5, 31))

        # Q2 so far: April and May
        assert forecast.current_quarter == 60000
        assert forecast.projected_quarter == pytest.approx(90000)
        assert forecast.current_year == 120000
        assert forecast.projected_year == pytest.approx(120000 / 5 * 12)

    def test_no_records(self):
        forecast = forecast_commissions([], date(2024, 2, 1))

        assert forecast.current_month == 0
        assert forecast.projected_month == 0
        assert forecast.projected_quarter == 0
        assert forecast.projected_year == 0
        assert forecast.confidence == "low"

    def test_first_day_projection_is_unsmoothed(self, make_commission):
        records = [make_commission(amount=1000, created_at="2024-01-01T08:00:00")]

        forecast = forecast_commissions(records, date(2024, 1, 1))

        assert forecast.projected_month == pytest.approx(31000)


class TestProjectMonth:
    """Tests for project_month."""

    def test_zero_progress_uses_fallback(self):
        assert project_month(5000, 0, fallback=1234) == 1234

    def test_trailing_average(self, make_commission):
        records = [
            make_commission(amount=300, created_at="2024-05-10T00:00:00"),
            make_commission(amount=300, created_at="2024-03-10T00:00:00"),
            make_commission(amount=900, created_at="2024-02-10T00:00:00"),
            make_commission(amount=900, created_at="2024-06-01T00:00:00"),
        ]
        assert trailing_monthly_average(records, date(2024, 6, 15)) == pytest.approx(200)


class TestConfidenceLabel:
    """Tests for the fixed confidence thresholds."""

    @pytest.mark.parametrize("count,label", [
        (0, "low"),
        (20, "low"),
        (21, "medium"),
        (50, "medium"),
        (51, "high"),
    ])
    def test_thresholds(self, count, label):
        assert confidence_label(count) == label
