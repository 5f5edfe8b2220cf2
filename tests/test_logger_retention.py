from pathlib import Path

import pytest

from logkeeper.errors import EvictionFailed
from logkeeper.retention import enforce_retention, evict_overflow
from logkeeper.scanner import scan_log_dir


def test_retention_prunes_old_logs(tmp_path, make_logs):
    paths = make_logs(5)

    evicted = enforce_retention(tmp_path, keep=2)

    remaining = sorted(p.name for p in tmp_path.iterdir())
    assert remaining == [paths[-1].name]
    assert evicted == paths[:4]


@pytest.mark.parametrize(
    "count,keep",
    [(0, 1), (1, 1), (3, 1), (4, 5), (5, 5), (6, 5), (12, 5), (3, 10)],
)
def test_retention_converges(tmp_path, make_logs, count, keep):
    paths = make_logs(count)

    evicted = enforce_retention(tmp_path, keep=keep)

    assert len(evicted) == max(0, count - keep + 1)
    remaining = sorted(p.name for p in tmp_path.iterdir())
    assert len(remaining) == min(count, keep - 1)
    # survivors are always the newest
    assert remaining == sorted(p.name for p in paths[len(paths) - len(remaining):])


def test_evict_overflow_trims_records_in_place(tmp_path, make_logs):
    make_logs(4)
    records = scan_log_dir(tmp_path)

    evict_overflow(records, keep=3)

    assert len(records) == 2
    assert all(r.path.exists() for r in records)


def test_evict_overflow_rejects_zero(tmp_path):
    with pytest.raises(ValueError):
        evict_overflow([], keep=0)


def test_eviction_failure_is_fatal(tmp_path, make_logs, monkeypatch):
    make_logs(3)
    calls = []

    def deny(self, missing_ok=False):
        calls.append(self)
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "unlink", deny)

    with pytest.raises(EvictionFailed):
        enforce_retention(tmp_path, keep=1)

    # aborts after the first failed delete
    assert len(calls) == 1


def test_eviction_of_vanished_file_is_fatal(tmp_path, make_logs):
    make_logs(2)
    records = scan_log_dir(tmp_path)
    records[-1].path.unlink()

    with pytest.raises(EvictionFailed):
        evict_overflow(records, keep=1)


def test_retention_removes_foreign_then_evicts(tmp_path, make_logs):
    paths = make_logs(5)
    (tmp_path / "notes.txt").write_text("x")

    enforce_retention(tmp_path, keep=5)

    remaining = sorted(p.name for p in tmp_path.iterdir())
    assert remaining == sorted(p.name for p in paths[1:])
