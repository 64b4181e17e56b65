"""Tests for the candidate filter and the directory walker."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from app_picker.rules import (
    DEFAULT_RULES,
    ExclusionRule,
    ExclusionRules,
    has_target_extension,
    is_candidate,
)
from app_picker.walker import SearchFrontier, canonical_path, list_directory

_real_scandir = os.scandir


class TestExclusionRules(unittest.TestCase):
    """Test keyword and structural exclusion rules."""

    def test_installer_keywords_excluded(self):
        """Installer, updater and tool executables match a rule."""
        for path in [
            "C:\\Games\\Foo\\GameSetup.exe",
            "C:\\Games\\Foo\\update_tool.exe",
            "C:\\Games\\Foo\\unins000.exe",
            "C:\\Games\\Foo\\UnityCrashHandler64.exe",
            "C:\\Games\\Foo\\Launcher.exe",
            "C:\\Games\\Foo\\benchmark.exe",
            "D:\\Steam\\steamapps\\common\\SteamVR\\bin\\vrmonitor.exe",
        ]:
            with self.subTest(path=path):
                self.assertTrue(DEFAULT_RULES.matches(path))

    def test_keywords_case_insensitive(self):
        """Keyword matching ignores case."""
        self.assertTrue(DEFAULT_RULES.matches("C:\\Games\\Foo\\SETUP.EXE"))
        self.assertTrue(DEFAULT_RULES.matches("C:\\Games\\Foo\\Updater.exe"))

    def test_structural_markers_excluded(self):
        """Data, redistributable, hidden and system folders are excluded."""
        for path in [
            "C:\\Users\\me\\AppData\\Local\\Foo\\foo.exe",
            "C:\\Games\\Foo\\Foo_Data\\player.exe",
            "D:\\SteamLibrary\\steamapps\\common\\Foo\\_CommonRedist\\DirectX\\dx.exe",
            "C:\\Program Files\\Foo\\__Installer\\foo.exe",
            "C:\\$Recycle.Bin\\foo.exe",
            "/home/me/.wine/drive_c/foo.exe",
            "C:\\Windows\\notepad.exe",
        ]:
            with self.subTest(path=path):
                self.assertTrue(DEFAULT_RULES.matches(path))

    def test_plausible_games_not_excluded(self):
        """Ordinary game executables pass every rule."""
        for path in [
            "C:\\Games\\Half-Life 2\\hl2.exe",
            "D:\\SteamLibrary\\steamapps\\common\\Portal\\portal.exe",
            "C:\\Games\\metadata\\viewer.exe",
            "C:\\Games\\SVC\\game.exe",
        ]:
            with self.subTest(path=path):
                self.assertIsNone(DEFAULT_RULES.first_match(path))

    def test_service_marker_case_sensitive(self):
        """The anti-cheat service marker only matches lowercase."""
        self.assertTrue(DEFAULT_RULES.matches("C:\\Games\\Foo\\BEsvc.exe"))
        self.assertFalse(DEFAULT_RULES.matches("C:\\Games\\Foo\\BESVC.exe"))

    def test_first_match_reports_reason(self):
        """first_match returns the matching rule."""
        rule = DEFAULT_RULES.first_match("C:\\Games\\Foo\\GameSetup.exe")
        self.assertIsNotNone(rule)
        self.assertEqual(rule.pattern, "setup")
        self.assertEqual(rule.reason, "installer")

    def test_extended_rules(self):
        """Extra keywords produce a new rule set, leaving the defaults alone."""
        extended = DEFAULT_RULES.extended(["server", "  "])
        self.assertEqual(len(extended), len(DEFAULT_RULES) + 1)
        self.assertTrue(extended.matches("C:\\Games\\Foo\\DedicatedServer.exe"))
        self.assertFalse(DEFAULT_RULES.matches("C:\\Games\\Foo\\DedicatedServer.exe"))

    def test_segment_rules(self):
        """Segment rules only look at individual path components."""
        rules = ExclusionRules([ExclusionRule("bin", kind="segment_equals")])
        self.assertTrue(rules.matches("/opt/foo/bin/foo.exe"))
        self.assertFalse(rules.matches("/opt/foo/binaries/foo.exe"))

    def test_invalid_rule_kind(self):
        """Unknown rule kinds are rejected."""
        with self.assertRaises(ValueError):
            ExclusionRule("x", kind="regex")


class TestIsCandidate(unittest.TestCase):
    """Test the candidate predicate against real files."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def _touch(self, relative: str) -> str:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"MZ")
        return str(path)

    def test_accepts_plain_executable(self):
        """An existing .exe with an innocent name is a candidate."""
        self.assertTrue(is_candidate(self._touch("Foo/game.exe")))

    def test_extension_case_insensitive(self):
        """Upper-case extensions are accepted."""
        self.assertTrue(is_candidate(self._touch("Foo/GAME.EXE")))

    def test_rejects_other_extensions(self):
        """Non-executables are rejected."""
        self.assertFalse(is_candidate(self._touch("Foo/readme.txt")))
        self.assertFalse(is_candidate(self._touch("Foo/game.exe.bak")))

    def test_rejects_missing_file(self):
        """A vanished file is a rejection, not an error."""
        path = self._touch("Foo/game.exe")
        os.remove(path)
        self.assertFalse(is_candidate(path))

    def test_rejects_keyword(self):
        """Excluded names are rejected even if they exist."""
        self.assertFalse(is_candidate(self._touch("Foo/GameSetup.exe")))
        self.assertFalse(is_candidate(self._touch("Foo/bin64/tool_update.exe")))

    def test_idempotent(self):
        """Evaluating twice on an unchanged filesystem gives the same answer."""
        for path in [self._touch("Foo/game.exe"), self._touch("Foo/GameSetup.exe")]:
            self.assertEqual(is_candidate(path), is_candidate(path))

    def test_has_target_extension(self):
        """Extension checks ignore case and require an exact suffix."""
        self.assertTrue(has_target_extension("C:\\a\\b.Exe"))
        self.assertFalse(has_target_extension("C:\\a\\exe"))


class TestWalker(unittest.TestCase):
    """Test directory listing and the search frontier."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        (self.root / "sub").mkdir()
        (self.root / "game.exe").write_bytes(b"MZ")
        (self.root / "Other.EXE").write_bytes(b"MZ")
        (self.root / "readme.txt").write_text("hi")
        (self.root / "sub" / "inner.exe").write_bytes(b"MZ")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_list_directory(self):
        """Only direct executables and direct subdirectories are listed."""
        listing = list_directory(str(self.root))
        self.assertTrue(listing.accessible)
        self.assertEqual(
            {os.path.basename(path) for path in listing.files},
            {"game.exe", "Other.EXE"}
        )
        self.assertEqual(listing.subdirs, [str(self.root / "sub")])

    def test_missing_directory(self):
        """A vanished directory yields an empty, inaccessible listing."""
        listing = list_directory(str(self.root / "gone"))
        self.assertFalse(listing.accessible)
        self.assertEqual(listing.files, [])
        self.assertEqual(listing.subdirs, [])

    def test_permission_denied(self):
        """Unreadable directories are skipped without raising."""
        locked = str(self.root / "sub")

        def fake_scandir(path):
            if os.fspath(path) == locked:
                raise PermissionError(13, "Permission denied", locked)
            return _real_scandir(path)

        with patch("app_picker.walker.os.scandir", side_effect=fake_scandir):
            listing = list_directory(locked)

        self.assertFalse(listing.accessible)
        self.assertEqual(listing.files, [])

    def test_frontier_unique(self):
        """A directory is only enqueued once per session."""
        frontier = SearchFrontier([str(self.root)])
        self.assertEqual(len(frontier), 1)
        self.assertFalse(frontier.add(str(self.root)))
        self.assertFalse(frontier.add(str(self.root) + os.sep))

        popped = frontier.pop()
        self.assertEqual(popped, str(self.root))
        self.assertFalse(frontier)
        # Already expanded directories are not enqueued again
        self.assertFalse(frontier.add(str(self.root)))

    def test_frontier_symlink_alias(self):
        """A symlink to a seen directory is treated as the same directory."""
        link = self.root / "alias"
        try:
            os.symlink(self.root / "sub", link, target_is_directory=True)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported")

        frontier = SearchFrontier([str(self.root / "sub")])
        self.assertFalse(frontier.add(str(link)))
        self.assertEqual(canonical_path(str(link)), canonical_path(str(self.root / "sub")))


if __name__ == "__main__":
    unittest.main()
