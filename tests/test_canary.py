import pytest

from utpcore import canary


def test_one_megabyte_file_repeats_pattern(tmp_path):
    path = tmp_path / "canary.bin"
    canary.create_canary_file(path, 1)
    content = path.read_bytes()
    assert len(content) == 1024 * 1024
    assert content[:256] == bytes(range(256))
    assert content == bytes(range(256)) * (len(content) // 256)


def test_zero_size_creates_empty_file(tmp_path):
    path = tmp_path / "empty.bin"
    canary.create_canary_file(path, 0)
    assert path.read_bytes() == b""


def test_refuses_to_overwrite(tmp_path):
    path = tmp_path / "existing.bin"
    path.write_bytes(b"keep")
    with pytest.raises(FileExistsError):
        canary.create_canary_file(path, 1)
    assert path.read_bytes() == b"keep"


def test_negative_size_rejected(tmp_path):
    path = tmp_path / "neg.bin"
    with pytest.raises(ValueError):
        canary.create_canary_file(path, -1)
    assert not path.exists()


def test_main_writes_file(tmp_path):
    path = tmp_path / "cli.bin"
    assert canary.main([str(path), "2"]) == 0
    content = path.read_bytes()
    assert len(content) == 2 * 1024 * 1024
    assert content[-256:] == bytes(range(256))


@pytest.mark.parametrize(
    "argv, message",
    [
        ([], "first arg should be filename"),
        (["only-name"], "second arg should be size in megabytes"),
    ],
)
def test_main_missing_arguments(argv, message):
    with pytest.raises(SystemExit) as exc:
        canary.main(argv)
    assert exc.value.code == message


@pytest.mark.parametrize("size", ["abc", "-3", "1.5"])
def test_main_invalid_size(tmp_path, size):
    path = tmp_path / "bad.bin"
    with pytest.raises(SystemExit) as exc:
        canary.main([str(path), size])
    assert exc.value.code == "invalid size"
    assert not path.exists()


def test_main_existing_file_fails(tmp_path):
    path = tmp_path / "taken.bin"
    path.write_bytes(b"")
    with pytest.raises(SystemExit) as exc:
        canary.main([str(path), "1"])
    assert "cannot write file" in str(exc.value.code)