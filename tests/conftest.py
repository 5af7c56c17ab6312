import hashlib

import pytest

from codeseek.embeddings.base import Embedder


class DummyProgress:
    """
    Test-only no-op progress object to avoid Rich LiveError from Live/Progress.

    Matches the subset of the Progress API used by the indexer.
    """

    def __init__(self, *args, **kwargs):
        self.finished = False

    def add_task(self, *args, **kwargs):
        return "task-id"

    def update(self, *args, **kwargs):
        pass

    def advance(self, *args, **kwargs):
        pass

    def start(self):
        self.finished = False

    def stop(self):
        self.finished = True

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()


class KeywordEmbedder(Embedder):
    """Deterministic embedder for tests: one hashed bucket per lowercase word."""

    def __init__(self, dimension: int = 16):
        self._dimension = dimension
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        vector = [0.0] * self._dimension
        for word in text.lower().split():
            bucket = int(hashlib.md5(word.encode("utf-8")).hexdigest(), 16) % self._dimension
            vector[bucket] += 1.0
        if not any(vector):
            vector[0] = 1.0
        return vector

    @property
    def dimension(self):
        return self._dimension


@pytest.fixture(autouse=True)
def dummy_progress(monkeypatch):
    """
    Patch codeseek.utils.progress.create_progress_bar for all tests so no real
    Rich Progress/Live instance is started during pytest runs.
    """
    from codeseek.utils import progress as progress_utils

    def _create_progress_bar(description: str = "Processing", total=None):
        return DummyProgress(), "task-id"

    monkeypatch.setattr(progress_utils, "create_progress_bar", _create_progress_bar)
    monkeypatch.setattr(progress_utils, "Progress", DummyProgress)
    yield


@pytest.fixture
def keyword_embedder():
    return KeywordEmbedder()


@pytest.fixture
def source_tree(tmp_path):
    """Small C# tree with two files sharing a base name in different folders."""
    (tmp_path / "Services").mkdir()
    (tmp_path / "Legacy").mkdir()
    (tmp_path / "Services" / "VersionService.cs").write_text(
        "using System;\n"
        "\n"
        "public class VersionService\n"
        "{\n"
        "    public string GetCurrentVersion()\n"
        "    {\n"
        "        return File.ReadAllText(\"version.txt\");\n"
        "    }\n"
        "\n"
        "    public void SaveVersion(string version)\n"
        "    {\n"
        "        File.WriteAllText(\"version.txt\", version);\n"
        "    }\n"
        "}\n",
        encoding="utf-8",
    )
    (tmp_path / "Legacy" / "VersionService.cs").write_text(
        "// old implementation kept for reference\n",
        encoding="utf-8",
    )
    (tmp_path / "README.md").write_text("# not indexed\n", encoding="utf-8")
    return tmp_path
