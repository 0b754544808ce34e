import copy
import json

import pytest

from herohub import loader
from herohub.loader import parse_videos
from herohub.normalizer import normalize
from tests.fixtures import DOCUMENT, VIDEOS


@pytest.fixture
def document():
    return copy.deepcopy(DOCUMENT)


@pytest.fixture
def catalog(document):
    return normalize(document)


@pytest.fixture
def videos():
    return parse_videos(copy.deepcopy(VIDEOS))


@pytest.fixture
def data_files(tmp_path, monkeypatch):
    """Point the loader at temporary copies of both documents."""
    data_path = tmp_path / "data.json"
    videos_path = tmp_path / "videos.json"
    data_path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    videos_path.write_text(json.dumps(VIDEOS), encoding="utf-8")
    monkeypatch.setattr(loader.config, "DATA_JSON_PATH", str(data_path))
    monkeypatch.setattr(loader.config, "VIDEOS_JSON_PATH", str(videos_path))
    loader.reset_cache()
    yield data_path, videos_path
    loader.reset_cache()
