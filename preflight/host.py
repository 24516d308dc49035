"""Host probe — the only place checks touch processes and files."""

import os
import subprocess
from typing import Callable, Optional, Sequence, TextIO


class HostProbe:
    """Runs host utilities and reads pseudo-files on behalf of the checks.

    ``run`` defaults to :func:`subprocess.run`; tests pass a fake with the
    same signature. ``timeout`` is handed through to ``run`` unchanged, so
    ``None`` blocks until the utility exits.
    """

    def __init__(
        self,
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        timeout: Optional[float] = None,
    ):
        self._run = run
        self.timeout = timeout

    def output(self, argv: Sequence[str]) -> str:
        """Return stdout of ``argv``.

        Raises FileNotFoundError if the binary is missing and
        subprocess.CalledProcessError (with ``.stdout`` set) on non-zero exit.
        """
        result = self._run(
            list(argv),
            capture_output=True,
            text=True,
            check=True,
            timeout=self.timeout,
        )
        return result.stdout or ""

    def read_text(self, path: str) -> str:
        with open(path) as f:
            return f.read()

    def open_text(self, path: str) -> TextIO:
        return open(path)

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)
