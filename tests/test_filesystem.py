"""Tests for the filesystem gateway."""

import errno
from unittest.mock import patch

import pytest

from docs_relocator.core.filesystem import FilesystemGateway
from docs_relocator.exceptions import FilesystemError


@pytest.fixture
def gateway():
    return FilesystemGateway()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "old" / "doc.zip"
    path.parent.mkdir()
    path.write_bytes(b"archive contents")
    return path


class TestExists:
    """Test FilesystemGateway.exists."""

    def test_existing_and_missing(self, gateway, source_file, tmp_path):
        assert gateway.exists(source_file) is True
        assert gateway.exists(tmp_path / "nope.zip") is False

    def test_path_through_a_file_is_missing(self, gateway, source_file):
        assert gateway.exists(source_file / "child.zip") is False

    def test_name_too_long_is_raised_as_filesystem_error(self, gateway, tmp_path):
        with pytest.raises(FilesystemError, match="Could not check"):
            gateway.exists(tmp_path / ("x" * 300) / "doc.zip")

    def test_access_denied_is_raised_as_filesystem_error(self, gateway, source_file):
        with patch("docs_relocator.core.filesystem.os.stat",
                   side_effect=PermissionError(errno.EACCES, "Permission denied")):
            with pytest.raises(FilesystemError, match="Permission denied"):
                gateway.exists(source_file)


class TestEnsureDirectory:
    """Test FilesystemGateway.ensure_directory."""

    def test_creates_missing_ancestors(self, gateway, tmp_path):
        target = tmp_path / "a" / "b" / "c"

        assert gateway.ensure_directory(target) is True
        assert target.is_dir()

    def test_existing_directory_is_noop(self, gateway, tmp_path):
        target = tmp_path / "here"
        target.mkdir()

        assert gateway.ensure_directory(target) is False
        assert target.is_dir()

    def test_failure_is_raised_as_filesystem_error(self, gateway, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(FilesystemError):
            gateway.ensure_directory(blocker / "child")


class TestMove:
    """Test FilesystemGateway.move."""

    def test_moves_file(self, gateway, source_file, tmp_path):
        destination = tmp_path / "new" / "doc.zip"
        destination.parent.mkdir()

        gateway.move(source_file, destination)

        assert not source_file.exists()
        assert destination.read_bytes() == b"archive contents"

    def test_missing_source(self, gateway, tmp_path):
        destination = tmp_path / "doc.zip"

        with pytest.raises(FilesystemError, match="disappeared"):
            gateway.move(tmp_path / "gone.zip", destination)
        assert not destination.exists()

    def test_refuses_to_overwrite(self, gateway, source_file, tmp_path):
        destination = tmp_path / "existing.zip"
        destination.write_bytes(b"other")

        with pytest.raises(FilesystemError, match="already exists"):
            gateway.move(source_file, destination)

        assert source_file.exists()
        assert destination.read_bytes() == b"other"

    def test_missing_destination_directory(self, gateway, source_file, tmp_path):
        with pytest.raises(FilesystemError):
            gateway.move(source_file, tmp_path / "no" / "such" / "doc.zip")
        assert source_file.exists()

    def test_cross_device_move_copies_then_publishes(self, gateway, source_file, tmp_path):
        destination = tmp_path / "new" / "doc.zip"
        destination.parent.mkdir()

        with patch("docs_relocator.core.filesystem.os.link",
                   side_effect=OSError(errno.EXDEV, "Invalid cross-device link")):
            gateway.move(source_file, destination)

        assert not source_file.exists()
        assert destination.read_bytes() == b"archive contents"
        assert list(destination.parent.iterdir()) == [destination]

    def test_failed_copy_leaves_no_partial_file(self, gateway, source_file, tmp_path):
        destination = tmp_path / "new" / "doc.zip"
        destination.parent.mkdir()

        with patch("docs_relocator.core.filesystem.os.link",
                   side_effect=OSError(errno.EXDEV, "Invalid cross-device link")), \
             patch("docs_relocator.core.filesystem.os.rename",
                   side_effect=OSError(errno.EIO, "I/O error")):
            with pytest.raises(FilesystemError):
                gateway.move(source_file, destination)

        assert source_file.exists()
        assert list(destination.parent.iterdir()) == []

    def test_unexpected_link_error(self, gateway, source_file, tmp_path):
        with patch("docs_relocator.core.filesystem.os.link",
                   side_effect=OSError(errno.EIO, "I/O error")):
            with pytest.raises(FilesystemError, match="Failed to move"):
                gateway.move(source_file, tmp_path / "doc2.zip")
        assert source_file.exists()

    def test_refused_link_falls_back_to_copy(self, gateway, source_file, tmp_path):
        destination = tmp_path / "new" / "doc.zip"
        destination.parent.mkdir()

        with patch("docs_relocator.core.filesystem.os.link",
                   side_effect=OSError(errno.EPERM, "Operation not permitted")):
            gateway.move(source_file, destination)

        assert not source_file.exists()
        assert destination.read_bytes() == b"archive contents"

    def test_denied_link_is_not_retried_as_copy(self, gateway, source_file, tmp_path):
        destination = tmp_path / "new" / "doc.zip"
        destination.parent.mkdir()

        with patch("docs_relocator.core.filesystem.os.link",
                   side_effect=PermissionError(errno.EACCES, "Permission denied")):
            with pytest.raises(FilesystemError, match="Permission denied"):
                gateway.move(source_file, destination)

        assert source_file.exists()
        assert list(destination.parent.iterdir()) == []

    def test_unreadable_source_path(self, gateway, tmp_path):
        with pytest.raises(FilesystemError, match="Could not check"):
            gateway.move(tmp_path / ("x" * 300) / "doc.zip", tmp_path / "doc.zip")
