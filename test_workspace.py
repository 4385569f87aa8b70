#!/usr/bin/env python3
"""Tests for workspace directory preparation."""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add the project root to the path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from rsetup.git_sync.error_types import ErrorCategory
from rsetup.workspace import ensure_workspace


class TestEnsureWorkspace(unittest.TestCase):

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_creates_missing_directory(self):
        workspace = self.temp_dir / "r_analysis_env"

        result = ensure_workspace(workspace)

        self.assertTrue(result.success)
        self.assertTrue(result.details['created'])
        self.assertTrue(workspace.is_dir())

    def test_existing_directory_is_a_no_op(self):
        workspace = self.temp_dir / "r_analysis_env"
        workspace.mkdir()
        (workspace / "keep.txt").write_text("data")

        result = ensure_workspace(workspace)

        self.assertTrue(result.success)
        self.assertFalse(result.details['created'])
        self.assertEqual((workspace / "keep.txt").read_text(), "data")

    def test_mkdir_failure(self):
        workspace = self.temp_dir / "r_analysis_env"

        with patch.object(Path, "mkdir", side_effect=PermissionError("read-only")):
            result = ensure_workspace(workspace)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "WORKSPACE_CREATE_FAILED")
        self.assertEqual(result.category, ErrorCategory.WORKSPACE)


if __name__ == "__main__":
    unittest.main(verbosity=2)
