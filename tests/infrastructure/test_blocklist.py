"""Tests for the name blocklist loader."""
import logging

from civle.infrastructure.blocklist import Blocklist


class TestBlocklist:
    def test_words_normalized(self):
        blocklist = Blocklist(["  Bad ", "RUDE", "", "   "])
        assert sorted(blocklist) == ["bad", "rude"]
        assert len(blocklist) == 2

    def test_contains_is_case_insensitive(self):
        assert "BAD" in Blocklist(["bad"])

    def test_from_file(self, tmp_path):
        path = tmp_path / "bad-words.txt"
        path.write_text("bad\n\nRude\r\n", encoding="utf-8")
        assert sorted(Blocklist.from_file(str(path))) == ["bad", "rude"]

    def test_missing_file_gives_empty_blocklist(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="civle.blocklist"):
            blocklist = Blocklist.from_file(str(tmp_path / "missing.txt"))
        assert len(blocklist) == 0
        assert "not found" in caplog.text

    def test_directory_path_gives_empty_blocklist(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="civle.blocklist"):
            blocklist = Blocklist.from_file(str(tmp_path))
        assert len(blocklist) == 0
