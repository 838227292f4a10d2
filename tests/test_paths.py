import os

import pytest

from fsroots.paths import (
    PathSyntax,
    classify_path,
    convert_to_windows_path,
    expand_home,
    is_path_within,
    normalize_path,
    strip_wrapping,
)


class TestClassifyPath:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/mnt/c/Users/test", PathSyntax.WSL_MOUNT),
            ("/mnt/D/data", PathSyntax.WSL_MOUNT),
            ("/c/Users/test", PathSyntax.UNIX_DRIVE),
            ("C:\\Users\\test", PathSyntax.WINDOWS_DRIVE),
            ("d:/projects", PathSyntax.WINDOWS_DRIVE),
            ("/usr/local/bin", PathSyntax.POSIX),
            ("/mnt/c", PathSyntax.POSIX),
            ("/mnt/cd/data", PathSyntax.POSIX),
            ("docs/readme.md", PathSyntax.RELATIVE),
            ("", PathSyntax.RELATIVE),
        ],
    )
    def test_classify_path(self, path, expected):
        # Act
        result = classify_path(path)

        # Assert
        assert result is expected

    def test_wsl_mount_wins_over_single_letter_form(self):
        # Arrange
        path = "/mnt/c/x"

        # Act & Assert
        assert classify_path(path) is PathSyntax.WSL_MOUNT
        assert normalize_path(path) == "C:\\x"


class TestStripWrapping:
    def test_strips_whitespace_and_matching_quotes(self):
        assert strip_wrapping('  "/usr/local"  ') == "/usr/local"
        assert strip_wrapping("'C:/x'") == "C:/x"

    def test_keeps_mismatched_quotes(self):
        assert strip_wrapping("'/usr/local\"") == "'/usr/local\""

    def test_removes_only_one_pair(self):
        assert strip_wrapping("\"'/tmp'\"") == "'/tmp'"


class TestConvertToWindowsPath:
    def test_wsl_mount_converts_to_drive(self):
        assert convert_to_windows_path("/mnt/c/Users/x") == "C:\\Users\\x"

    def test_unix_drive_converts_to_drive(self):
        assert convert_to_windows_path("/c/Users/x") == "C:\\Users\\x"

    def test_windows_drive_keeps_letter_case(self):
        assert convert_to_windows_path("c:/Users/x") == "c:\\Users\\x"

    def test_posix_and_relative_paths_unchanged(self):
        assert convert_to_windows_path("/usr/bin") == "/usr/bin"
        assert convert_to_windows_path("docs/a.txt") == "docs/a.txt"


class TestNormalizePath:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/mnt/c/Users/test", "C:\\Users\\test"),
            ("/mnt/C/Users/test", "C:\\Users\\test"),
            ("/c/Users/test", "C:\\Users\\test"),
            ("c:/Users/test", "C:\\Users\\test"),
            ("C:\\Users\\test", "C:\\Users\\test"),
            ("c:/Users/MixedCase/File.TXT", "C:\\Users\\MixedCase\\File.TXT"),
        ],
    )
    def test_drive_forms_become_uppercase_backslash_paths(self, path, expected):
        assert normalize_path(path) == expected

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/usr//local/bin/", "/usr/local/bin"),
            ("/usr/local/bin", "/usr/local/bin"),
            ("/", "/"),
            ("///", "/"),
            ("/home/user//", "/home/user"),
        ],
    )
    def test_posix_paths_only_lose_duplicate_and_trailing_slashes(
        self, path, expected
    ):
        assert normalize_path(path) == expected

    def test_posix_paths_keep_dot_segments(self):
        # No Windows processing happens on plain POSIX paths.
        assert normalize_path("/usr/../bin") == "/usr/../bin"

    def test_collapses_repeated_separators_in_drive_paths(self):
        assert normalize_path("C:\\\\Users\\\\\\test") == "C:\\Users\\test"
        assert normalize_path("c://Users//test//") == "C:\\Users\\test"
        assert normalize_path("/mnt/c//Users///test") == "C:\\Users\\test"

    def test_slash_runs_collapse_before_drive_detection(self):
        assert normalize_path("//c/Users/x") == "C:\\Users\\x"
        assert normalize_path("/mnt//c/Users/x") == "C:\\Users\\x"
        assert normalize_path("//mnt///d//data") == "D:\\data"

    def test_resolves_dot_segments_in_drive_paths(self):
        assert (
            normalize_path("C:\\Users\\..\\Windows\\.\\System32")
            == "C:\\Windows\\System32"
        )
        assert normalize_path("/mnt/c/Users/../Windows") == "C:\\Windows"

    def test_dot_segments_never_climb_above_drive_root(self):
        assert normalize_path("C:\\..\\..\\x") == "C:\\x"

    def test_drive_root_keeps_its_separator(self):
        assert normalize_path("/mnt/c/") == "C:\\"
        assert normalize_path("c:/") == "C:\\"

    def test_strips_quotes_and_whitespace(self):
        assert normalize_path('  "/usr/local/"  ') == "/usr/local"
        assert normalize_path("'c:/Program Files/'") == "C:\\Program Files"

    def test_nested_quotes_lose_only_the_outer_pair(self):
        assert normalize_path("'\"/a\"'") == '"/a"'

    def test_relative_paths_use_host_normalization(self):
        assert normalize_path("foo//bar/./baz") == os.path.join("foo", "bar", "baz")

    def test_empty_input_does_not_raise(self):
        assert normalize_path("") == "."
        assert normalize_path("   ") == "."

    @pytest.mark.parametrize(
        "path",
        [
            "/mnt/c/Users/test",
            "/c/Users/test",
            "/usr//local/bin/",
            "/",
            "c:/Users/test",
            "C:\\Users\\..\\Windows",
            "  '/mnt/d/data/'  ",
            "//c/Users/x",
            "/mnt//c/Users/x",
        ],
    )
    def test_normalize_is_idempotent(self, path):
        # Arrange
        once = normalize_path(path)

        # Act
        twice = normalize_path(once)

        # Assert
        assert twice == once


class TestExpandHome:
    @pytest.fixture(autouse=True)
    def fake_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
        self.home = str(tmp_path)

    def test_bare_tilde_is_home(self):
        assert expand_home("~") == self.home

    def test_tilde_slash_joins_home(self):
        assert expand_home("~/docs") == os.path.join(self.home, "docs")

    def test_absolute_path_unchanged(self):
        assert expand_home("/abs/path") == "/abs/path"

    def test_other_tilde_forms_unchanged(self):
        assert expand_home("~user/docs") == "~user/docs"
        assert expand_home("docs/~/x") == "docs/~/x"


class TestIsPathWithin:
    @pytest.mark.parametrize(
        "path,directory,expected",
        [
            ("/tmp/ok/sub/file.txt", "/tmp/ok", True),
            ("/tmp/ok", "/tmp/ok/", True),
            ("/tmp/ok2", "/tmp/ok", False),
            ("/tmp/ok/../secret", "/tmp/ok", False),
            ("/tmp/OK/x", "/tmp/ok", False),
            ("/anything/at/all", "/", True),
            ("c:/users/me/x", "C:\\Users\\Me", True),
            ("/mnt/c/Users/me", "C:\\Users", True),
            ("C:\\Users\\..\\Windows", "C:\\Users", False),
            ("C:\\x", "/x", False),
            ("/x", "C:\\", False),
            ("D:\\data", "C:\\", False),
        ],
    )
    def test_is_path_within(self, path, directory, expected):
        assert is_path_within(path, directory) is expected
