import pandas as pd

from waffleviz.services import DataProfiler


def _build_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Date": [d.strftime("%Y-%m-%d") for d in pd.date_range("2024-01-01", periods=6, freq="D")],
            "Region": ["East", "West"] * 3,
            "Sales": [100, 120, 130, 90, 150, 160],
        }
    )


def test_profile_reports_kinds_and_domains():
    profile = DataProfiler().build_profile(_build_frame())
    assert profile["row_count"] == 6
    columns = {col["name"]: col for col in profile["columns"]}
    assert set(columns) == {"Date", "Region", "Sales"}
    assert columns["Date"]["kind"] == "temporal"
    assert columns["Date"]["domain"]["values"] == ["2024-01-01T00:00:00", "2024-01-06T00:00:00"]
    assert columns["Region"]["kind"] == "ordinal"
    assert columns["Region"]["domain"]["values"] == ["East", "West"]
    assert columns["Region"]["distinct"] == 2
    assert columns["Sales"]["domain"] == {"kind": "linear", "values": [90.0, 160.0]}
    assert profile["first_time_column"] == "Date"
    assert profile["first_linear_column"] == "Sales"


def test_profile_skips_domain_when_sample_misleads():
    frame = pd.DataFrame({"when": ["2024-01-01", "soon"]})
    profile = DataProfiler().build_profile(frame)
    column = profile["columns"][0]
    assert column["kind"] == "temporal"
    assert column["domain"] is None
