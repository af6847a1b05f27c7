"""Working directory locking."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from gitlab_acctest.harness.errors import WorkdirLockError

if TYPE_CHECKING:
    from types import TracebackType

try:
    import fcntl  # type: ignore[attr-defined]
except ImportError:  # pragma: no cover
    fcntl = None  # type: ignore[assignment]

LOCK_NAME = ".acctest.lock"


class WorkdirLock:
    """Non-blocking exclusive lock on a Terraform working directory.

    Two runs sharing a directory would clobber each other's ``main.tf`` and
    state, so the second one fails fast instead of waiting.
    """

    def __init__(self, workdir: Path) -> None:
        self._lock_path = Path(workdir) / LOCK_NAME
        self._file = None

    def __enter__(self) -> WorkdirLock:
        self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._lock_path.open("a+", encoding="utf-8")
        try:
            self._acquire()
        except OSError as e:
            self._file.close()
            self._file = None
            raise WorkdirLockError(
                f"{self._lock_path.parent} is in use by another run"
            ) from e
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._file is None:
            return
        try:
            self._release()
        finally:
            self._file.close()
            self._file = None

    def _acquire(self) -> None:
        if fcntl is not None:
            fcntl.flock(self._file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            return

        if sys.platform == "win32":  # pragma: no cover
            import msvcrt

            msvcrt.locking(self._file.fileno(), msvcrt.LK_NBLCK, 1)
            return

        raise WorkdirLockError("Workdir locking is not supported on this platform")

    def _release(self) -> None:
        if fcntl is not None:
            fcntl.flock(self._file.fileno(), fcntl.LOCK_UN)
            return

        if sys.platform == "win32":  # pragma: no cover
            import msvcrt

            msvcrt.locking(self._file.fileno(), msvcrt.LK_UNLCK, 1)
