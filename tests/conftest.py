"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image

from dupefolder.models import ComparisonMode, FileSignature, FolderContent


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the real ~/.dupefolder configuration."""
    from dupefolder.user_config import get_user_config

    monkeypatch.setenv('DUPEFOLDER_CONFIG_DIR', str(tmp_path_factory.mktemp('config')))
    monkeypatch.delenv('DUPEFOLDER_MODE', raising=False)
    monkeypatch.delenv('DUPEFOLDER_CACHE_FILE', raising=False)
    get_user_config().reload()
    yield
    get_user_config().reload()


def make_image(path: Path, size=(100, 80), color='red') -> Path:
    """Write a PNG image, creating parent folders as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new('RGB', size, color=color).save(path, 'PNG')
    return path


@pytest.fixture
def image_factory():
    """Factory fixture: image_factory(path, size=(w, h), color=...)."""
    return make_image


@pytest.fixture
def duplicate_trees(temp_dir):
    """
    Create two identical folder trees and one unrelated folder.

    Layout:
        trees/album/x.png           (100x80 red)
        trees/album/sub/y.png       (50x60 blue)
        trees/album_copy/...        byte-for-byte copy of album
        trees/other/z.png           (30x30 green)

    Returns:
        dict with 'root', 'album', 'copy' and 'other' paths
    """
    root = temp_dir / "trees"
    album = root / "album"
    make_image(album / "x.png", (100, 80), 'red')
    make_image(album / "sub" / "y.png", (50, 60), 'blue')

    copy = root / "album_copy"
    shutil.copytree(album, copy)

    other = root / "other"
    make_image(other / "z.png", (30, 30), 'green')

    return {
        'root': root,
        'album': album,
        'copy': copy,
        'other': other,
    }


def make_content(files: dict, subfolders=(), mode=ComparisonMode.QUICK) -> FolderContent:
    """
    Build a FolderContent from {relative_path: (size, width, height[, hash])}.
    """
    content = FolderContent(mode=mode, all_subfolders=list(subfolders))
    for relative_path, fields in files.items():
        sig = FileSignature(*fields)
        content.all_files.append(relative_path)
        content.file_info[relative_path] = sig
        content.total_size += sig.file_size
    return content


@pytest.fixture
def content_factory():
    """Factory fixture wrapping make_content."""
    return make_content
