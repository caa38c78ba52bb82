import os
import subprocess
from unittest import mock

import pytest

from sealkit.mount import (
    DefaultMounter,
    MountError,
    Overlay2Mounter,
    new_mount_driver,
    path_exists,
    supports_overlay,
)


@pytest.fixture
def fixture_root(tmp_path):
    layers = tmp_path / "layers"
    for name, files in {
        "layer1": {"123.txt": "123456"},
        "layer2": {"test1.txt": "test1"},
        "layer3": {"sub/c.txt": "c"},
        "layer4": {"d.txt": "d"},
    }.items():
        for rel, content in files.items():
            path = layers / name / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
    (tmp_path / "upper").mkdir()
    return tmp_path


@pytest.mark.parametrize(
    "layer_names, expected",
    [
        (["layers/layer1"], ["123.txt"]),
        (["layers/layer1", "layers/layer2"], ["123.txt", "test1.txt"]),
        (["layers/layer1", "layers/layer2", "layers/layer3"], ["123.txt", "test1.txt", "sub/c.txt"]),
        (
            ["layers", "layers/layer2", "layers/layer3", "layers/layer4"],
            ["layer1/123.txt", "layer2/test1.txt", "test1.txt", "sub/c.txt", "d.txt"],
        ),
        (
            ["layers/layer1", "layers/layer2", "layers/layer3", "layers/layer4"],
            ["123.txt", "test1.txt", "sub/c.txt", "d.txt"],
        ),
    ],
)
def test_default_mount_copies_layers(fixture_root, layer_names, expected):
    target = fixture_root / "target"
    layers = [str(fixture_root / name) for name in layer_names]
    DefaultMounter().mount(str(target), str(fixture_root / "upper"), *layers)
    for rel in expected:
        assert (target / rel).is_file(), rel


def test_default_mount_empty_target(fixture_root):
    layers = [str(fixture_root / "layers/layer1"), str(fixture_root / "layers/layer2")]
    with pytest.raises(MountError):
        DefaultMounter().mount("", str(fixture_root / "upper"), *layers)


def test_default_mount_single_file_layer(fixture_root):
    target = fixture_root / "target7"
    DefaultMounter().mount(
        str(target), str(fixture_root / "upper"), str(fixture_root / "layers/layer2/test1.txt")
    )
    assert (target / "test1.txt").read_text() == "test1"


def test_default_mount_first_layer_wins(tmp_path):
    low = tmp_path / "low"
    high = tmp_path / "high"
    low.mkdir()
    high.mkdir()
    (low / "a.txt").write_text("low")
    (high / "a.txt").write_text("high")
    target = tmp_path / "target"
    DefaultMounter().mount(str(target), str(tmp_path / "upper"), str(high), str(low))
    assert (target / "a.txt").read_text() == "high"


def test_default_mount_missing_layer(tmp_path):
    with pytest.raises(MountError):
        DefaultMounter().mount(str(tmp_path / "target"), "", str(tmp_path / "missing"))


def test_default_unmount_removes_target(fixture_root):
    target = fixture_root / "target"
    mounter = DefaultMounter()
    mounter.mount(str(target), "", str(fixture_root / "layers/layer1"))
    mounter.unmount(str(target))
    assert not target.exists()


def test_default_unmount_missing_target(tmp_path):
    DefaultMounter().unmount(str(tmp_path / "missing"))
    assert not (tmp_path / "missing").exists()


def test_path_exists(tmp_path):
    assert path_exists(str(tmp_path)) is True
    assert path_exists(str(tmp_path / "missing")) is False


def test_overlay_mount_empty_target(tmp_path):
    with pytest.raises(MountError, match="target cannot be empty"):
        Overlay2Mounter().mount("", str(tmp_path), str(tmp_path))


def test_overlay_mount_empty_layers(tmp_path):
    with pytest.raises(MountError, match="layers cannot be empty"):
        Overlay2Mounter().mount(str(tmp_path / "merged"), str(tmp_path / "upper"))


def test_overlay_mount_failure_removes_workdir(tmp_path):
    target = tmp_path / "merged"
    failure = subprocess.CalledProcessError(32, ["mount"])
    with mock.patch("sealkit.mount.subprocess.run", side_effect=failure) as run:
        with pytest.raises(MountError):
            Overlay2Mounter().mount(str(target), str(tmp_path / "upper"), "/a", "/b")
    argv = run.call_args.args[0]
    assert argv[:5] == ["mount", "-t", "overlay", "overlay", "-o"]
    assert argv[5] == f"lowerdir=/a:/b,upperdir={tmp_path / 'upper'},workdir={target / 'work'}"
    assert not (target / "work").exists()


def test_overlay_unmount_failure(tmp_path):
    failure = subprocess.CalledProcessError(1, ["umount"])
    with mock.patch("sealkit.mount.subprocess.run", side_effect=failure):
        with pytest.raises(MountError):
            Overlay2Mounter().unmount(str(tmp_path))


def test_supports_overlay_false_without_modprobe():
    with mock.patch("sealkit.mount.subprocess.run", side_effect=FileNotFoundError("modprobe")):
        assert supports_overlay() is False


def test_new_mount_driver_falls_back_to_default(tmp_path):
    failure = subprocess.CalledProcessError(1, ["modprobe"])
    with mock.patch("sealkit.mount.subprocess.run", side_effect=failure):
        driver = new_mount_driver()
    assert type(driver).__name__ == "DefaultMounter"
    layer = tmp_path / "layer"
    layer.mkdir()
    (layer / "f.txt").write_text("x")
    target = tmp_path / "target"
    driver.mount(str(target), "", str(layer))
    assert path_exists(str(target / "f.txt")) is True
    assert (target / "f.txt").read_text() == "x"


def test_copied_dirs_are_usable(fixture_root):
    target = fixture_root / "target"
    DefaultMounter().mount(str(target), "", str(fixture_root / "layers/layer3"))
    assert os.stat(target / "sub").st_mode & 0o700 == 0o700