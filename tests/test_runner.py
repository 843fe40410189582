from pathlib import Path

import pytest

from bookstage.staging import NotFoundError, ResultCollector, RunContext, StagingOutcome, StagingResult, run_staging
from bookstage.staging import runner as runner_module


def _tree_snapshot(root: Path) -> dict:
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def test_foo_staged_bar_skipped(sample_tree: dict) -> None:
    context = RunContext(source_root=sample_tree["source"], dest_root=sample_tree["dest"], workers=2)
    results = run_staging(context)

    outcomes = {result.name: result.outcome for result in results}
    assert outcomes == {
        "bar": StagingOutcome.SKIPPED_MISSING_ASSETS,
        "foo": StagingOutcome.STAGED,
    }
    assert [result.name for result in results] == ["bar", "foo"]
    assert [path.name for path in sample_tree["dest"].iterdir()] == ["foo"]


def test_concurrent_matches_sequential(tmp_path: Path, make_example) -> None:
    for index in range(12):
        name = f"example_{index:02d}"
        if index % 4 == 0:
            make_example(name, files=["source.rs"])
        else:
            make_example(name)
    source_root = tmp_path / "examples"

    sequential = run_staging(RunContext(source_root=source_root, dest_root=tmp_path / "seq", workers=1))
    concurrent = run_staging(RunContext(source_root=source_root, dest_root=tmp_path / "par", workers=6))

    assert sequential == concurrent
    assert _tree_snapshot(tmp_path / "seq") == _tree_snapshot(tmp_path / "par")


def test_only_selection_includes_unknown_names(sample_tree: dict, caplog: pytest.LogCaptureFixture) -> None:
    context = RunContext(
        source_root=sample_tree["source"],
        dest_root=sample_tree["dest"],
        only=["foo", "ghost"],
        workers=1,
    )
    caplog.set_level("WARNING")
    results = run_staging(context)

    assert [(result.name, result.outcome) for result in results] == [
        ("foo", StagingOutcome.STAGED),
        ("ghost", StagingOutcome.SKIPPED_MISSING_ASSETS),
    ]
    assert results[1].missing == ("source.rs", "vis_code.svg", "vis_timeline.svg")
    assert "ghost" in caplog.text
    assert not (sample_tree["dest"] / "bar").exists()


def test_one_failure_does_not_stop_others(tmp_path: Path, make_example, monkeypatch) -> None:
    for name in ("alpha", "beta", "gamma"):
        make_example(name)
    real_stage = runner_module.stage

    def exploding_stage(source_root, dest_root, name):
        if name == "beta":
            raise PermissionError("Permission denied: beta")
        return real_stage(source_root, dest_root, name)

    monkeypatch.setattr(runner_module, "stage", exploding_stage)
    results = run_staging(RunContext(source_root=tmp_path / "examples", dest_root=tmp_path / "dest", workers=3))

    by_name = {result.name: result for result in results}
    assert by_name["beta"].outcome is StagingOutcome.FAILED
    assert "Permission denied" in by_name["beta"].reason
    assert by_name["alpha"].outcome is StagingOutcome.STAGED
    assert by_name["gamma"].outcome is StagingOutcome.STAGED


def test_missing_source_root_aborts(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        run_staging(RunContext(source_root=tmp_path / "missing", dest_root=tmp_path / "dest"))


def test_collector_slots_are_write_once() -> None:
    collector = ResultCollector()
    collector.record(StagingResult.failed("foo", "boom"))
    with pytest.raises(RuntimeError):
        collector.record(StagingResult.failed("foo", "again"))
    assert len(collector) == 1


def test_path_like_selection_never_leaves_destination(tmp_path: Path, make_example) -> None:
    make_example("foo")
    outside = tmp_path / "outside"
    outside.mkdir()
    for filename in ("source.rs", "vis_code.svg", "vis_timeline.svg"):
        (outside / filename).write_text("x", encoding="utf-8")
    dest_root = tmp_path / "book" / "assets"

    results = run_staging(
        RunContext(source_root=tmp_path / "examples", dest_root=dest_root, only=["../outside"], workers=1)
    )

    assert [(result.name, result.outcome) for result in results] == [
        ("../outside", StagingOutcome.SKIPPED_MISSING_ASSETS)
    ]
    assert not (tmp_path / "book" / "outside").exists()
    assert not dest_root.exists()
