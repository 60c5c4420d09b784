"""Tests for output file locking."""

from unittest.mock import patch

import pytest
from filelock import Timeout

from crossplan.core.locking import lock_path_for, output_lock


class TestOutputLock:
    def test_lock_path(self, tmp_path):
        assert lock_path_for(tmp_path / "plan.env") == tmp_path / ".plan.env.lock"

    def test_lock_held_inside_block(self, tmp_path):
        target = tmp_path / "out" / "plan.env"

        with output_lock(target):
            assert lock_path_for(target).exists()
            target.write_text("x")

        assert target.read_text() == "x"

    def test_timeout(self, tmp_path):
        target = tmp_path / "plan.env"

        with patch("crossplan.core.locking.FileLock.acquire", side_effect=Timeout("lock")):
            with pytest.raises(Timeout):
                with output_lock(target, timeout=0.01):
                    pass
