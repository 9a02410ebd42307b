"""Tests for data directory resolution.

Covers: babysleep.common.setup
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch


class TestProjectPaths(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_override_env_wins(self):
        from babysleep.common.setup import resolve_data_root
        with patch.dict(os.environ, {"BABYSLEEP_HOME": self.tmpdir}):
            self.assertEqual(resolve_data_root(), Path(self.tmpdir))

    def test_build_creates_folders(self):
        from babysleep.common.setup import ProjectPaths
        paths = ProjectPaths.build(Path(self.tmpdir) / "data")
        for folder in (paths.data, paths.logs, paths.current, paths.sessions):
            self.assertTrue(folder.is_dir())

    def test_ensure_directory_must_exist(self):
        from babysleep.common.setup import ensure_directory
        with self.assertRaises(FileNotFoundError):
            ensure_directory(Path(self.tmpdir) / "missing", must_exist=True)


if __name__ == "__main__":
    unittest.main()
