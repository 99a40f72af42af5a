from pathlib import Path

import pytest

from toolkit.errors import DirectoryError
from toolkit.utils import create_dir_if_not_exists


def test_create_dir_is_idempotent(tmp_path: Path) -> None:
    target = tmp_path / "myDir"

    create_dir_if_not_exists(target)
    assert target.is_dir()

    create_dir_if_not_exists(target)
    assert target.is_dir()


def test_create_dir_makes_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"

    result = create_dir_if_not_exists(str(target))

    assert result == target
    assert target.is_dir()


def test_create_dir_leaves_existing_contents(tmp_path: Path) -> None:
    (tmp_path / "keep.txt").write_text("keep")

    create_dir_if_not_exists(tmp_path)

    assert (tmp_path / "keep.txt").read_text() == "keep"


def test_create_dir_fails_when_path_is_a_file(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(DirectoryError):
        create_dir_if_not_exists(blocker)

    with pytest.raises(DirectoryError):
        create_dir_if_not_exists(blocker / "child")
