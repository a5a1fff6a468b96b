import os

import pytest

from kubeutil.temp import Directory, TempDir, create_temp_dir


def test_temp_dir():
    directory = create_temp_dir("prefix")
    try:
        assert os.path.isdir(directory.name)
        assert os.path.basename(directory.name).startswith("prefix")
        assert os.listdir(directory.name) == []

        with directory.new_file("ONE") as one:
            one.write(b"hello")
        directory.new_file("TWO").close()
        with pytest.raises(FileExistsError):
            directory.new_file("TWO")

        assert sorted(os.listdir(directory.name)) == ["ONE", "TWO"]
        with open(os.path.join(directory.name, "ONE"), "rb") as f:
            assert f.read() == b"hello"

        directory.delete()
        assert not os.path.exists(directory.name)
    finally:
        directory.delete()


def test_delete_missing_directory_is_quiet(tmp_path):
    path = str(tmp_path / "gone")
    missing = TempDir(path)
    assert missing.delete() is None
    assert missing.name == path
    assert not os.path.exists(missing.name)


def test_context_manager_deletes():
    with create_temp_dir("ctx") as directory:
        path = directory.name
        assert os.path.basename(path).startswith("ctx")
        assert os.path.isdir(path)
    assert directory.name == path
    assert not os.path.exists(directory.name)


def test_directory_is_abstract():
    with pytest.raises(TypeError):
        Directory()