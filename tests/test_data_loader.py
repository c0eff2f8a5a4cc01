import asyncio
import json

import pandas as pd
import pytest
import requests

from waffleviz.services import data_loader
from waffleviz.services.data_loader import FileDataLoader, file_extension, get_data_type, to_frame
from waffleviz.services.errors import LoadError, UnsupportedSourceError


def test_file_extension_ignores_query_and_case():
    assert file_extension("data.xlsx") == "xlsx"
    assert file_extension("https://example.org/data.CSV?token=1") == "csv"
    assert file_extension("no_extension") == ""


def test_unsupported_extension_fails_before_loading(monkeypatch):
    loader = FileDataLoader()
    calls = []
    monkeypatch.setattr(loader, "_read", lambda *args: calls.append(args))
    with pytest.raises(UnsupportedSourceError) as excinfo:
        loader.load("data.xlsx")
    assert excinfo.value.extension == "xlsx"
    assert calls == []


def test_load_csv_keeps_raw_strings(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("cat,val\na,10\nb,30\n", encoding="utf-8")
    frame = asyncio.run(FileDataLoader().load(str(path)))
    assert list(frame.columns) == ["cat", "val"]
    assert frame["val"].tolist() == ["10", "30"]


def test_load_tsv(tmp_path):
    path = tmp_path / "data.tsv"
    path.write_text("cat\tval\na\t1\n", encoding="utf-8")
    frame = asyncio.run(FileDataLoader().load(str(path)))
    assert frame.to_dict(orient="records") == [{"cat": "a", "val": "1"}]


def test_load_json_array_and_object(tmp_path):
    array_path = tmp_path / "rows.json"
    array_path.write_text(json.dumps([{"cat": "a", "val": 1}, {"cat": "b", "val": 2}]), encoding="utf-8")
    object_path = tmp_path / "one.json"
    object_path.write_text(json.dumps({"cat": "a", "val": 1}), encoding="utf-8")
    loader = FileDataLoader()
    assert len(asyncio.run(loader.load(str(array_path)))) == 2
    assert len(asyncio.run(loader.load(str(object_path)))) == 1


def test_missing_or_malformed_files_raise_load_error(tmp_path):
    loader = FileDataLoader()
    with pytest.raises(LoadError):
        asyncio.run(loader.load(str(tmp_path / "missing.csv")))
    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")
    with pytest.raises(LoadError):
        asyncio.run(loader.load(str(broken)))


@pytest.mark.parametrize("content", ["5", "null", "true", '"text"'])
def test_scalar_json_raises_load_error(tmp_path, content):
    path = tmp_path / "scalar.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(LoadError):
        asyncio.run(FileDataLoader().load(str(path)))


class _FakeResponse:
    def __init__(self, text):
        self.text = text

    def raise_for_status(self):
        return None


def test_load_over_http(monkeypatch):
    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        seen["timeout"] = timeout
        return _FakeResponse("cat,val\na,5\n")

    monkeypatch.setattr(data_loader.requests, "get", fake_get)
    frame = asyncio.run(FileDataLoader(timeout=3).load("https://example.org/data.csv"))
    assert frame["val"].tolist() == ["5"]
    assert seen == {"url": "https://example.org/data.csv", "timeout": 3}


def test_http_failure_raises_load_error(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(data_loader.requests, "get", fake_get)
    with pytest.raises(LoadError):
        asyncio.run(FileDataLoader().load("https://example.org/data.json"))


def test_get_data_type_shapes():
    assert get_data_type('[{"a": 1}]') == "json"
    assert get_data_type("data.csv") == "location"
    assert get_data_type([]) == "array"
    assert get_data_type({"a": 1}) == "object"
    assert get_data_type(pd.DataFrame()) == "frame"


def test_to_frame_normalizes_inputs():
    assert len(to_frame({"a": 1})) == 1
    assert to_frame('[{"a": 1}, {"a": 2}]')["a"].tolist() == [1, 2]
    with pytest.raises(ValueError):
        to_frame("data.csv")
    with pytest.raises(ValueError):
        to_frame([1, 2])
