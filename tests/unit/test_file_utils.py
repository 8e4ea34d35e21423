"""Tests for file_utils module."""

import pytest

from image2card.utils.file_utils import ensure_directory, safe_filename


class TestEnsureDirectory:
    """Tests for ensure_directory function."""

    def test_creates_directory(self, tmp_path):
        """Should create a new directory."""
        new_dir = tmp_path / "new_folder"
        assert not new_dir.exists()

        result = ensure_directory(new_dir)

        assert new_dir.is_dir()
        assert result == new_dir

    def test_creates_nested_directories(self, tmp_path):
        nested_dir = tmp_path / "level1" / "level2" / "level3"

        ensure_directory(nested_dir)

        assert nested_dir.is_dir()

    def test_existing_directory_ok(self, tmp_path):
        existing_dir = tmp_path / "existing"
        existing_dir.mkdir()

        assert ensure_directory(existing_dir) == existing_dir


class TestSafeFilename:
    """Tests for safe_filename function."""

    @pytest.mark.parametrize(
        "input_str, expected",
        [
            ("file<name>.txt", "file_name_.txt"),
            ("file:name.txt", "file_name.txt"),
            ('file"name".txt', "file_name_.txt"),
            ("file/name\\path.txt", "file_name_path.txt"),
            ("file|name.txt", "file_name.txt"),
            ("file?name.txt", "file_name.txt"),
            ("file*name.txt", "file_name.txt"),
            ("", "unnamed"),
        ],
        ids=[
            "angle_brackets",
            "colon",
            "quotes",
            "slashes",
            "pipe",
            "question_mark",
            "asterisk",
            "empty_string",
        ],
    )
    def test_replaces_unsafe_characters(self, input_str, expected):
        """Should replace unsafe filesystem characters with underscore."""
        assert safe_filename(input_str) == expected

    def test_only_invalid_characters_uses_fallback(self):
        assert safe_filename('<>:"/\\|?*') == "unnamed"
        assert safe_filename("///", fallback="card") == "card"

    def test_strips_control_characters(self):
        assert safe_filename("vocab\x00\n.mp3") == "vocab.mp3"

    def test_preserves_safe_characters(self):
        safe_name = "valid_filename-123.txt"
        assert safe_filename(safe_name) == safe_name

    def test_japanese_characters_preserved(self):
        """Community audio names carry the Japanese word."""
        assert safe_filename("forvo_読む_user.mp3") == "forvo_読む_user.mp3"

    def test_truncates_to_255_bytes_keeping_extension(self):
        name = "読" * 200 + ".mp3"

        result = safe_filename(name)

        assert len(result.encode("utf-8")) <= 255
        assert result.endswith(".mp3")
        assert result.startswith("読")
