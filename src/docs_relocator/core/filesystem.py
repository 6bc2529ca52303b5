"""Filesystem gateway: the only component that touches the share."""

import errno
import logging
import os
import shutil
import uuid
from pathlib import Path

from ..exceptions import FilesystemError

logger = logging.getLogger(__name__)

# errno values meaning "hard links are not possible here", not "the move failed".
# EPERM is how FAT-style filesystems and fs.protected_hardlinks refuse a link;
# a real permission problem still fails the copy or the unlink that follows.
_LINK_UNSUPPORTED = {
    errno.EXDEV,
    errno.EPERM,
    errno.EMLINK,
    getattr(errno, "ENOTSUP", errno.EPERM),
    getattr(errno, "EOPNOTSUPP", errno.EPERM),
}


class FilesystemGateway:
    """Thin synchronous wrapper around existence checks, mkdir and move.

    Every ``OSError`` leaves this class as a ``FilesystemError``. No
    retries happen here; callers decide whether to try again.
    """

    def exists(self, path: Path) -> bool:
        """Return whether ``path`` exists.

        Raises:
            FilesystemError: when the path cannot be checked at all, e.g.
                a name that is too long or a share that denies access.
        """
        try:
            os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as e:
            raise FilesystemError(f"Could not check {path}: {e}") from e
        return True

    def ensure_directory(self, path: Path) -> bool:
        """Create ``path`` and any missing parents.

        Returns:
            True if the directory was created, False if it already existed.
        """
        path = Path(path)
        try:
            if path.is_dir():
                return False
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Failed to create directory {path}: {e}") from e
        return True

    def move(self, source: Path, destination: Path) -> None:
        """Move ``source`` to ``destination`` without overwriting.

        The destination name only ever appears once the file is complete:
        same-device moves hard-link and unlink, other moves copy into a
        hidden partial file next to the destination and rename it.
        """
        source = Path(source)
        destination = Path(destination)

        if not self.exists(source):
            raise FilesystemError(f"Source file disappeared before the move: {source}")
        if self.exists(destination):
            raise FilesystemError(f"Destination already exists: {destination}")

        try:
            os.link(source, destination)
        except FileExistsError as e:
            raise FilesystemError(f"Destination already exists: {destination}") from e
        except FileNotFoundError as e:
            raise FilesystemError(f"Failed to move {source} to {destination}: {e}") from e
        except OSError as e:
            if e.errno not in _LINK_UNSUPPORTED:
                raise FilesystemError(f"Failed to move {source} to {destination}: {e}") from e
            logger.debug("Hard link unavailable for %s (%s), copying instead", source, e)
            self._copy_into_place(source, destination)

        try:
            source.unlink()
        except OSError as e:
            raise FilesystemError(
                f"Copied {source} to {destination} but could not remove the source: {e}"
            ) from e

    def _copy_into_place(self, source: Path, destination: Path) -> None:
        partial = destination.with_name(f".{destination.name}.{uuid.uuid4().hex}.partial")
        try:
            with open(source, "rb") as src, open(partial, "xb") as dst:
                shutil.copyfileobj(src, dst)
                dst.flush()
                os.fsync(dst.fileno())
            shutil.copystat(source, partial)

            if destination.exists():
                raise FilesystemError(f"Destination already exists: {destination}")
            os.rename(partial, destination)
        except OSError as e:
            raise FilesystemError(f"Failed to move {source} to {destination}: {e}") from e
        finally:
            try:
                partial.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not remove partial file %s: %s", partial, e)
