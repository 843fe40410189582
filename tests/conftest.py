from pathlib import Path
import sys
from typing import Callable, Iterable

import pytest
from typer.testing import CliRunner

ASSET_FILES = ("source.rs", "vis_code.svg", "vis_timeline.svg")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    from bookstage.config import settings

    for key in ("BOOKSTAGE_SOURCE", "BOOKSTAGE_DEST", "BOOKSTAGE_BUILDER", "BOOKSTAGE_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    settings.get_settings.cache_clear()
    yield
    settings.get_settings.cache_clear()


@pytest.fixture
def make_example(tmp_path: Path) -> Callable[..., Path]:
    """
    Create an example folder under tmp_path/examples with the given files.
    """
    source_root = tmp_path / "examples"
    source_root.mkdir(exist_ok=True)

    def _make(name: str, files: Iterable[str] = ASSET_FILES) -> Path:
        example_dir = source_root / name
        example_dir.mkdir(parents=True, exist_ok=True)
        for filename in files:
            if filename.endswith(".rs"):
                body = f"fn main() {{\n    let s = String::from(\"{name}\");\n}}\n"
            else:
                body = f'<svg xmlns="http://www.w3.org/2000/svg"><text>{name}/{filename}</text></svg>\n'
            (example_dir / filename).write_text(body, encoding="utf-8")
        return example_dir

    return _make


@pytest.fixture
def sample_tree(tmp_path: Path, make_example) -> dict:
    """
    `foo` has every asset, `bar` only has its source file.
    """
    make_example("foo")
    make_example("bar", files=["source.rs"])
    return {"source": tmp_path / "examples", "dest": tmp_path / "book" / "src" / "assets" / "code_examples"}


@pytest.fixture
def python_builder() -> Callable[[str], list[str]]:
    """Builder command that runs a snippet with the current interpreter."""

    def _command(code: str) -> list[str]:
        return [sys.executable, "-c", code]

    return _command
