"""Download CLI: validates before writing, videos are optional."""

import json

import fetch_data
from herohub.errors import LoadError

from tests.fixtures import DOCUMENT, VIDEOS


class FakeClient:
    documents = {}

    def __init__(self, max_retries=1, sleep_s=0.5, session=None):
        self.max_retries = max_retries

    def get_json(self, url):
        doc = self.documents.get(url)
        if doc is None:
            raise LoadError(f"could not fetch {url}")
        return doc


def _run(monkeypatch, tmp_path, documents, *extra):
    FakeClient.documents = documents
    monkeypatch.setattr(fetch_data, "DocumentClient", FakeClient)
    return fetch_data.main(["--base-url", "https://example.org/data/", "--out", str(tmp_path), *extra])


class TestFetchData:

    def test_writes_both_documents(self, monkeypatch, tmp_path, capsys):
        code = _run(monkeypatch, tmp_path, {
            "https://example.org/data/data.json": DOCUMENT,
            "https://example.org/data/videos.json": VIDEOS,
        })
        assert code == 0
        assert json.loads((tmp_path / "data.json").read_text(encoding="utf-8")) == DOCUMENT
        assert json.loads((tmp_path / "videos.json").read_text(encoding="utf-8")) == VIDEOS
        out = capsys.readouterr().out
        assert "characters=11" in out
        assert "dropped_references=1" in out

    def test_malformed_document_not_written(self, monkeypatch, tmp_path, capsys):
        code = _run(monkeypatch, tmp_path, {"https://example.org/data/data.json": {"Worlds": [{"name": "DC"}]}})
        assert code == 1
        assert not (tmp_path / "data.json").exists()
        assert "[ERROR]" in capsys.readouterr().out

    def test_missing_videos_is_a_warning(self, monkeypatch, tmp_path, capsys):
        code = _run(monkeypatch, tmp_path, {"https://example.org/data/data.json": DOCUMENT})
        assert code == 0
        assert (tmp_path / "data.json").exists()
        assert not (tmp_path / "videos.json").exists()
        assert "[WARN]" in capsys.readouterr().out

    def test_skip_videos(self, monkeypatch, tmp_path):
        code = _run(monkeypatch, tmp_path, {"https://example.org/data/data.json": DOCUMENT}, "--skip-videos")
        assert code == 0
        assert not (tmp_path / "videos.json").exists()
