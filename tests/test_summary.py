"""Tests for result summaries and serialization."""

import json

from conftest import MiB, make_file

from diskscope.scanner import scan
from diskscope.summary import result_to_dict, result_to_json, top_children, top_folders


class TestTopChildren:
    """Test top_children function."""

    def test_largest_first(self, mixed_tree):
        result = scan(str(mixed_tree))
        names = [n.name for n in top_children(result.root, 3)]
        assert names == ["media", "backup", "src"]

    def test_skips_empty(self, mixed_tree):
        result = scan(str(mixed_tree))
        assert "empty" not in [n.name for n in top_children(result.root, 100)]

    def test_file_has_no_children(self, tmp_path):
        path = make_file(tmp_path / "x.bin", 10)
        assert top_children(scan(str(path)).root) == []


class TestTopFolders:
    """Test top_folders function."""

    def test_nested_folders(self, mixed_tree):
        result = scan(str(mixed_tree))
        folders = top_folders(result.root, limit=2)
        assert folders == [
            (46 * MiB, str(mixed_tree / "media")),
            (42 * MiB, str(mixed_tree / "media" / "clips")),
        ]

    def test_excludes_root(self, mixed_tree):
        result = scan(str(mixed_tree))
        assert str(mixed_tree) not in [p for _, p in top_folders(result.root)]


class TestSerialization:
    """Test result_to_dict and result_to_json."""

    def test_stats_shape(self, example_tree):
        data = result_to_dict(scan(str(example_tree)), include_tree=False)
        assert "root" not in data
        assert data["stats"]["total_size"] == 25 * MiB
        assert data["stats"]["largest_files"][0]["name"] == "b.mp4"

    def test_json_round_trip(self, example_tree):
        data = json.loads(result_to_json(scan(str(example_tree))))
        root = data["root"]
        assert root["kind"] == "directory"
        assert [c["name"] for c in root["children"]] == ["a.jpg", "b.mp4"]
        child = root["children"][0]
        assert child["kind"] == "file"
        assert child["category"] == "Image"
        assert "children" not in child
        assert data["stats"]["category_breakdown"] == {"Video": 20 * MiB, "Image": 5 * MiB}
