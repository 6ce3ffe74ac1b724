"""Boundary with the external static-site generator.

The generator renders every post document it finds, skipping those with
``draft: true`` unless asked to include drafts.  :func:`visible_items`
states that contract in Python; :class:`Generator` shells out to the
generator CLI for real builds and local previews.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from postflow.config import GeneratorConfig
from postflow.content.lifecycle import visible_items  # noqa: F401 -- re-export
from postflow.errors import GeneratorError

logger = logging.getLogger(__name__)


class Generator:
    """Runs the configured generator CLI from a site root."""

    def __init__(self, config: GeneratorConfig, site_root: Path | None = None) -> None:
        self._config = config
        self._root = site_root or Path(".")

    def build_command(self, preview: bool = False) -> list[str]:
        cmd = [self._config.command, *self._config.build_args]
        if preview:
            cmd.extend(self._config.preview_args)
        return cmd

    def serve_command(self) -> list[str]:
        return [self._config.command, *self._config.serve_args, *self._config.preview_args]

    def build(self, preview: bool = False) -> str:
        """Render the site once and return the generator's stdout.

        Raises:
            GeneratorError: If the generator is missing, times out, or exits
                non-zero.
        """
        cmd = self.build_command(preview=preview)
        logger.info("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=self._root,
                capture_output=True,
                text=True,
                timeout=self._config.timeout,
            )
        except FileNotFoundError as exc:
            raise GeneratorError(
                f"Generator not found: is '{self._config.command}' on the PATH?"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise GeneratorError(
                f"Generator timed out after {self._config.timeout}s"
            ) from exc

        if result.returncode != 0:
            raise GeneratorError(
                f"Generator failed (exit {result.returncode}): {result.stderr[:500]}"
            )

        return result.stdout.strip()

    def serve(self) -> int:
        """Run the generator's local preview server in the foreground.

        Drafts are always included.  Returns the server's exit code once
        the user stops it.
        """
        cmd = self.serve_command()
        logger.info("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, cwd=self._root)
        except FileNotFoundError as exc:
            raise GeneratorError(
                f"Generator not found: is '{self._config.command}' on the PATH?"
            ) from exc
        return result.returncode
