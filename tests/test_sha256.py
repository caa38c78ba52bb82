import io

import pytest

from sealkit.compress import CompressError
from sealkit.fileutil import clean_file
from sealkit.sha256 import SHA256, check_sum_and_place_layer


def _make_tree(root, content=b"alpha"):
    root.mkdir()
    (root / "a.txt").write_bytes(content)
    sub = root / "sub"
    sub.mkdir()
    (sub / "b.txt").write_bytes(b"beta")
    return root


def test_check_sum_known_vector():
    digest = SHA256().check_sum(io.BytesIO(b"abc"))
    assert digest == "sha256:ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_check_sum_empty_input():
    digest = SHA256().check_sum(io.BytesIO(b""))
    assert digest == "sha256:e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_empty_digest():
    assert SHA256().empty_digest() == (
        "sha256:4f4fb700ef54461cfa02571ae0db9a0dc1e0cdb5577484a6d75e68dc38e8acc1"
    )


def test_check_sum_chunked_matches_whole():
    data = bytes(range(256)) * 1000
    sha = SHA256()
    assert sha.check_sum(io.BytesIO(data)) == sha.check_sum(io.BytesIO(data[:])) 
    assert sha.check_sum(io.BytesIO(data)) != sha.check_sum(io.BytesIO(data[:-1]))


def test_tar_check_sum_returns_rewound_file(tmp_path):
    src = _make_tree(tmp_path / "src")
    sha = SHA256()
    file, digest = sha.tar_check_sum(str(src))
    try:
        assert file.tell() == 0
        assert sha.check_sum(file) == digest
        assert digest.startswith("sha256:")
        assert len(digest) == len("sha256:") + 64
    finally:
        clean_file(file)


def test_tar_check_sum_is_stable(tmp_path):
    src = _make_tree(tmp_path / "src")
    sha = SHA256()
    digests = []
    for _ in range(2):
        file, digest = sha.tar_check_sum(str(src))
        clean_file(file)
        digests.append(digest)
    assert digests[0] == digests[1]


def test_tar_check_sum_depends_on_content(tmp_path):
    one = _make_tree(tmp_path / "one", b"alpha")
    two = _make_tree(tmp_path / "two", b"gamma")
    sha = SHA256()
    file_one, digest_one = sha.tar_check_sum(str(one))
    file_two, digest_two = sha.tar_check_sum(str(two))
    clean_file(file_one)
    clean_file(file_two)
    assert digest_one != digest_two


def test_tar_check_sum_missing_source(tmp_path):
    with pytest.raises(CompressError):
        SHA256().tar_check_sum(str(tmp_path / "missing"))


def test_check_sum_and_place_layer(tmp_path):
    src = _make_tree(tmp_path / "src")
    layer_dir = tmp_path / "layers"
    digest = check_sum_and_place_layer(str(src), str(layer_dir))
    placed = layer_dir / digest.split(":", 1)[1]
    assert (placed / "a.txt").read_bytes() == b"alpha"
    assert (placed / "sub" / "b.txt").read_bytes() == b"beta"