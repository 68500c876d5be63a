"""Tests for the report pipeline script."""

import json

import pandas as pd
import pytest

from run_pipeline import PROJ, REPORT_CSV, REPORT_JSON, load_bundle, main, write_outputs
from sales_report import InvalidInput, analyze_sales_data, default_options


@pytest.fixture
def bundle_path(tmp_path, ranked_bundle):
    path = tmp_path / "bundle.json"
    path.write_text(json.dumps(ranked_bundle), encoding="utf-8")
    return path


class TestLoadBundle:
    def test_round_trips_json(self, bundle_path, ranked_bundle):
        assert load_bundle(bundle_path) == ranked_bundle


class TestWriteOutputs:
    def test_writes_csv_and_json(self, tmp_path, ranked_bundle, capsys):
        rows = analyze_sales_data(ranked_bundle, default_options())
        csv_path, json_path = write_outputs(rows, tmp_path / "out")

        leaderboard = pd.read_csv(csv_path)
        assert leaderboard["seller_id"].tolist() == ["s_1000", "s_500", "s_200", "s_50"]
        assert leaderboard["bonus"].tolist() == [150.0, 50.0, 20.0, 0.0]

        report = json.loads(json_path.read_text(encoding="utf-8"))
        assert report[0]["top_products"] == [{"sku": "P1", "quantity": 1}]

        out = capsys.readouterr().out
        assert f"Saved {REPORT_CSV}" in out
        assert f"Saved {REPORT_JSON}" in out


class TestMain:
    def test_end_to_end(self, bundle_path, tmp_path):
        csv_path, json_path = main(bundle_path, tmp_path)
        assert csv_path.exists()
        assert json_path.exists()

    def test_sample_data(self, tmp_path):
        _, json_path = main(PROJ / "sample_data.json", tmp_path)
        report = json.loads(json_path.read_text(encoding="utf-8"))
        assert len(report) == 4
        assert report[-1]["bonus"] == 0
        profits = [row["profit"] for row in report]
        assert profits == sorted(profits, reverse=True)

    def test_invalid_bundle(self, tmp_path, ranked_bundle):
        ranked_bundle["sellers"] = []
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(ranked_bundle), encoding="utf-8")
        with pytest.raises(InvalidInput, match="sellers"):
            main(path, tmp_path)
