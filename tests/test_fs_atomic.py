from unittest import mock

import pytest

from utils import fs_atomic
from utils.fs_atomic import atomic_write_text


def test_atomic_write_creates_and_replaces(tmp_path):
    dst = tmp_path / "nested" / "tasks.json"
    atomic_write_text(dst, "[]")
    assert dst.read_text(encoding="utf-8") == "[]"
    atomic_write_text(dst, '[{"title": "Brød"}]')
    assert dst.read_text(encoding="utf-8") == '[{"title": "Brød"}]'
    assert [p.name for p in dst.parent.iterdir()] == ["tasks.json"]


def test_failed_replace_keeps_old_file_and_cleans_temp(tmp_path):
    dst = tmp_path / "tasks.json"
    dst.write_text("old", encoding="utf-8")
    with mock.patch.object(fs_atomic.os, "replace", side_effect=OSError("boom")):
        with pytest.raises(OSError):
            atomic_write_text(dst, "new")
    assert dst.read_text(encoding="utf-8") == "old"
    assert [p.name for p in tmp_path.iterdir()] == ["tasks.json"]
