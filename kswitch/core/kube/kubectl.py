"""Thin wrapper around the kubectl context commands."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

from kswitch.core.exceptions import KubectlError
from kswitch.core.paths import get_paths

logger = logging.getLogger(__name__)


class KubectlClient:
    """Lists, switches and renames kubeconfig contexts by shelling out to kubectl."""

    def __init__(self, binary: Optional[str] = None):
        self.binary = binary or get_paths().kubectl_binary

    def _run(self, *args: str) -> str:
        command = [self.binary, *args]
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise KubectlError(f"Cannot run {self.binary}: {exc}", command=command) from exc

        if result.returncode != 0:
            output = (result.stderr or result.stdout or "").strip()
            raise KubectlError(
                f"{' '.join(command)} failed: {output or f'exit code {result.returncode}'}",
                command=command,
                exit_code=result.returncode,
                output=output,
            )
        return result.stdout

    def list_contexts(self) -> list[str]:
        """Context names in kubeconfig order."""
        try:
            out = self._run("config", "get-contexts", "-o", "name")
        except KubectlError as exc:
            raise KubectlError(
                f"failed to get contexts: {exc}",
                command=exc.command,
                exit_code=exc.exit_code,
                output=exc.output,
            ) from exc
        return [line.strip() for line in out.splitlines() if line.strip()]

    def current_context(self) -> str:
        """Current context name, or an empty string if kubectl cannot tell."""
        try:
            return self._run("config", "current-context").strip()
        except KubectlError as exc:
            logger.debug("No current context: %s", exc)
            return ""

    def use_context(self, name: str) -> None:
        self._run("config", "use-context", name)

    def rename_context(self, old: str, new: str) -> None:
        self._run("config", "rename-context", old, new)
