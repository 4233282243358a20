"""Tests for the command line front-end."""

import json

from conftest import MiB

from diskscope import __main__ as cli
from diskscope.drives import Drive
from diskscope.models import DirectoryNode


class TestMain:
    """Test main function."""

    def test_text_summary(self, example_tree, capsys):
        assert cli.main([str(example_tree), "-q"]) == 0
        out = capsys.readouterr().out
        assert "Total: 25.00 MB | Files: 2 | Folders: 1 | Skipped: 0" in out
        assert "Video" in out
        assert "80.0%" in out
        assert "b.mp4" in out

    def test_json_output(self, example_tree, capsys):
        assert cli.main([str(example_tree), "--json", "--no-tree", "-q"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["stats"]["total_size"] == 25 * MiB
        assert "root" not in data

    def test_options_forwarded(self, mixed_tree, capsys):
        args = [str(mixed_tree), "--json", "--top", "1", "--floor", "1KB",
                "--ignore", "media", "--max-depth", "1", "--workers", "2", "-q"]
        assert cli.main(args) == 0
        stats = json.loads(capsys.readouterr().out)["stats"]
        assert [f["name"] for f in stats["largest_files"]] == ["old.tar"]
        assert "Video" not in stats["category_breakdown"]

    def test_missing_path(self, tmp_path, capsys):
        assert cli.main([str(tmp_path / "nope")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_drives(self, monkeypatch, capsys):
        drive = Drive("/media/usb", "vfat", 2048, 1024, 1024, 50.0, removable=True)
        monkeypatch.setattr(cli, "list_drives", lambda: [drive])
        assert cli.main(["--drives"]) == 0
        out = capsys.readouterr().out
        assert "/media/usb" in out
        assert "(removable)" in out

    def test_roots(self, monkeypatch, capsys):
        node = DirectoryNode(name="Home", path="/home/u", size=0, modified_at=0.0)
        monkeypatch.setattr(cli, "get_common_directories", lambda: [node])
        assert cli.main(["--roots"]) == 0
        assert "/home/u" in capsys.readouterr().out


class TestColorFormatter:
    """Test ColorFormatter."""

    def test_wraps_in_color(self):
        import logging

        fmt = cli.ColorFormatter("%(message)s")
        rec = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        assert fmt.format(rec) == "\033[31mboom\033[0m"

    def test_debug_uncolored(self):
        import logging

        fmt = cli.ColorFormatter("%(message)s")
        rec = logging.LogRecord("x", logging.DEBUG, __file__, 1, "quiet", None, None)
        assert fmt.format(rec) == "quiet"
