from pathlib import Path

import pytest

from bookstage.staging import NotFoundError, is_example_name, list_examples


def test_lists_child_directories_sorted(tmp_path: Path, make_example) -> None:
    make_example("zeta")
    make_example("alpha")
    (tmp_path / "examples" / "README.md").write_text("not an example", encoding="utf-8")
    (tmp_path / "examples" / ".git").mkdir()

    assert list(list_examples(tmp_path / "examples")) == ["alpha", "zeta"]


def test_listing_is_restartable(tmp_path: Path, make_example) -> None:
    make_example("first")
    listing = list_examples(tmp_path / "examples")
    assert list(listing) == ["first"]

    make_example("second")
    assert list(listing) == ["first", "second"]


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError) as exc:
        list_examples(tmp_path / "nope")
    assert "nope" in str(exc.value)


def test_file_root_raises(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(NotFoundError):
        list_examples(target)


@pytest.mark.parametrize("name", ["foo", "thread_vec2", "with.dot"])
def test_accepts_single_component_names(name: str) -> None:
    assert is_example_name(name)


@pytest.mark.parametrize("name", ["", ".", "..", "../outside", "a/b", "/abs"])
def test_rejects_path_like_names(name: str) -> None:
    assert not is_example_name(name)
