import os
from pathlib import Path

import pytest

from bookstage.staging import AssetRole, MissingAssetsError, validate


def test_complete_example(tmp_path: Path, make_example) -> None:
    make_example("foo")
    status = validate(tmp_path / "examples", "foo")
    assert status.complete
    status.require()


def test_reports_missing_roles(tmp_path: Path, make_example) -> None:
    make_example("bar", files=["source.rs"])
    status = validate(tmp_path / "examples", "bar")

    assert not status.complete
    assert status.missing == {AssetRole.CODE_VISUALIZATION, AssetRole.TIMELINE_VISUALIZATION}
    assert status.missing_files == ["vis_code.svg", "vis_timeline.svg"]
    with pytest.raises(MissingAssetsError) as exc:
        status.require()
    assert "vis_code.svg" in str(exc.value)


def test_directory_named_like_asset_does_not_count(tmp_path: Path, make_example) -> None:
    example = make_example("odd", files=["source.rs", "vis_code.svg"])
    (example / "vis_timeline.svg").mkdir()
    status = validate(tmp_path / "examples", "odd")
    assert status.missing == {AssetRole.TIMELINE_VISUALIZATION}


def test_absent_example_is_missing_everything(tmp_path: Path) -> None:
    (tmp_path / "examples").mkdir()
    status = validate(tmp_path / "examples", "ghost")
    assert status.missing == set(AssetRole)


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root bypasses permissions")
def test_unreadable_example_raises_permission_error(tmp_path: Path, make_example) -> None:
    example = make_example("locked")
    example.chmod(0o000)
    try:
        with pytest.raises(PermissionError):
            validate(tmp_path / "examples", "locked")
    finally:
        example.chmod(0o755)


def test_denied_access_raises_permission_error(tmp_path: Path, make_example, monkeypatch) -> None:
    from bookstage.staging import validator as validator_module

    make_example("locked")
    monkeypatch.setattr(validator_module.os, "access", lambda path, mode: False)

    with pytest.raises(PermissionError) as exc:
        validate(tmp_path / "examples", "locked")
    assert "locked" in str(exc.value)


def test_denied_access_fails_only_that_example(tmp_path: Path, make_example, monkeypatch) -> None:
    from bookstage.staging import StagingOutcome, process_example
    from bookstage.staging import validator as validator_module

    make_example("locked")
    monkeypatch.setattr(validator_module.os, "access", lambda path, mode: False)

    result = process_example(tmp_path / "examples", tmp_path / "dest", "locked")

    assert result.outcome is StagingOutcome.FAILED
    assert "Permission denied" in result.reason
    assert not (tmp_path / "dest").exists()
