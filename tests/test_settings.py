from pathlib import Path

from postbuild.settings import Settings, choose_env_file


def test_search_index_path_joins_dist_dir_and_filename():
    s = Settings(DIST_DIR="public", SEARCH_INDEX_FILENAME="index.json")
    assert s.search_index_path == Path("public") / "index.json"


def test_defaults_point_at_content_and_dist(monkeypatch):
    for name in ("CONTENT_DIR", "SOURCE_SUFFIX", "DIST_DIR", "SEARCH_INDEX_FILENAME"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.CONTENT_DIR == "content/posts"
    assert s.SOURCE_SUFFIX == ".md"
    assert s.search_index_path == Path("dist") / "search.json"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("CONTENT_DIR", "/srv/posts")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    s = Settings(_env_file=None)
    assert s.CONTENT_DIR == "/srv/posts"
    assert s.LOG_LEVEL == "DEBUG"


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
