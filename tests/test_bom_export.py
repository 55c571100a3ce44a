"""Tests for the results panel strings and the CSV bill of quantities."""
import sys
import os
import io
import csv
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bom_export import format_results, generate_csv, stringer_lengths
from stair_calculator import calculate_stair_metrics


class TestFormatResults:
    def test_totals(self, default_metrics):
        display = format_results(default_metrics)
        assert display["total_formwork"] == "28.81 m²"
        assert display["total_volume"] == "4.215 m³"

    def test_counts_are_integers(self, default_metrics):
        display = format_results(default_metrics)
        assert display["flights"] == "2"
        assert display["landings"] == "1"
        assert display["total_treads"] == "20"

    def test_breakdown_precision(self, default_metrics):
        display = format_results(default_metrics)
        assert display["formwork_landing_bottom"] == "6.13 m²"
        assert display["formwork_risers"] == "8.28 m²"
        assert display["volume_steps"] == "0.983 m³"
        assert display["volume_landings"] == "1.226 m³"

    def test_all_keys_present(self, default_metrics):
        expected = {
            "total_formwork", "total_volume", "flights", "landings", "total_treads",
            "stringer_lengths", "formwork_bottom_slab", "formwork_landing_bottom",
            "formwork_risers", "volume_waist_slabs", "volume_landings", "volume_steps",
        }
        assert set(format_results(default_metrics)) == expected

    def test_zero_report(self, make_params):
        display = format_results(calculate_stair_metrics(make_params(riser=0)))
        assert display["total_formwork"] == "0.00 m²"
        assert display["total_volume"] == "0.000 m³"
        assert display["stringer_lengths"] == "N/A"


class TestStringerLengths:
    def test_default(self, default_metrics):
        assert stringer_lengths(default_metrics) == "F1: 3.43m | F2: 3.43m"

    def test_single_flight(self, make_params):
        metrics = calculate_stair_metrics(make_params(height=0.18))
        assert stringer_lengths(metrics) == "F1: 0.18m"


class TestCsv:
    def _rows(self, metrics):
        return list(csv.reader(io.StringIO(generate_csv(metrics))))

    def test_header(self, default_metrics):
        assert self._rows(default_metrics)[0] == ["Item", "Category", "Quantity", "Unit"]

    def test_totals_rows(self, default_metrics):
        rows = {r[0]: r for r in self._rows(default_metrics)[1:]}
        assert rows["Total Formwork"][2] == "28.81"
        assert rows["Total Volume"][2] == "4.215"
        assert rows["Treads"][2] == "20"
        assert rows["Risers"][2] == "22"

    def test_one_stringer_row_per_flight(self, make_params):
        metrics = calculate_stair_metrics(make_params(height=7.0))
        stringer_rows = [r for r in self._rows(metrics) if r[0].startswith("Stringer")]
        assert len(stringer_rows) == metrics.num_flights == 4
        assert all(r[3] == "m" for r in stringer_rows)

    def test_zero_report_has_no_stringers(self, make_params):
        rows = self._rows(calculate_stair_metrics(make_params(height=0)))
        assert not any(r[0].startswith("Stringer") for r in rows)
        assert len(rows) > 1
