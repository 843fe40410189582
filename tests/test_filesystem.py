from pathlib import Path

from bookstage.util import copy_file_atomic, split_names, write_text_file


def test_copy_replaces_existing_file(tmp_path: Path) -> None:
    source = tmp_path / "vis_code.svg"
    source.write_bytes(b"<svg>new</svg>")
    target = tmp_path / "out" / "vis_code.svg"
    target.parent.mkdir()
    target.write_bytes(b"<svg>old and longer</svg>")

    copy_file_atomic(source, target)

    assert target.read_bytes() == b"<svg>new</svg>"
    assert [path.name for path in target.parent.iterdir()] == ["vis_code.svg"]


def test_write_text_creates_parents(tmp_path: Path) -> None:
    target = write_text_file(tmp_path / "a" / "b" / "note.txt", "hello")
    assert target.read_text(encoding="utf-8") == "hello"


def test_split_names() -> None:
    assert split_names(None) == []
    assert split_names(["foo,bar", "baz", "foo", " qux/ "]) == ["foo", "bar", "baz", "qux"]
