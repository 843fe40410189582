from pathlib import Path

import pytest

from bookstage.build import BuildError, BuildResult, BuildStatus, build


def test_successful_build_runs_in_book_root(tmp_path: Path, python_builder) -> None:
    dest = tmp_path / "book" / "src"
    dest.mkdir(parents=True)
    command = python_builder(
        "import os, pathlib; pathlib.Path('built.txt').write_text(os.environ['BOOKSTAGE_DEST'])"
    )

    result = build(dest, command=command, cwd=tmp_path / "book", timeout=30)

    assert result.status is BuildStatus.SUCCESS
    assert result.succeeded
    assert (tmp_path / "book" / "built.txt").read_text() == str(dest)
    result.raise_for_status()


def test_nonzero_exit_is_failure(tmp_path: Path, python_builder) -> None:
    command = python_builder("import sys; print('chapter missing', file=sys.stderr); sys.exit(4)")

    result = build(tmp_path, command=command, timeout=30)

    assert result.status is BuildStatus.FAILURE
    assert result.exit_code == 4
    assert "chapter missing" in result.detail
    with pytest.raises(BuildError) as exc:
        result.raise_for_status()
    assert exc.value.exit_code == 4


def test_timeout_is_failure(tmp_path: Path, python_builder) -> None:
    command = python_builder("import time; time.sleep(10)")

    result = build(tmp_path, command=command, timeout=0.5)

    assert result.status is BuildStatus.TIMED_OUT
    assert not result.succeeded
    assert "timed out" in result.describe()


def test_missing_builder_executable(tmp_path: Path) -> None:
    result = build(tmp_path, command=["definitely-not-a-real-site-builder"], timeout=5)

    assert result.status is BuildStatus.FAILURE
    assert result.exit_code == 127
    assert "not found" in result.detail


def test_skipped_counts_as_success() -> None:
    result = BuildResult.skipped()
    assert result.succeeded
    assert result.describe() == "Skipped"
