"""
Toolchain detection
"""

import shlex
import shutil
import subprocess
from typing import Dict, Any, Iterable, List, Optional


class ToolchainDetector:
    """Resolves compiler commands and reports their versions"""

    def __init__(self, logger: Any):
        self.logger = logger

    def detect(self, commands: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        Detect the given compiler commands

        Args:
            commands: Compiler commands, e.g. ["gcc", "g++"]

        Returns:
            Mapping of command to {"command", "path", "version"}
        """
        info = {}
        for command in commands:
            if command in info:
                continue
            argv = shlex.split(command)
            path = shutil.which(argv[0])
            info[command] = {
                "command": command,
                "path": path,
                "version": self._get_version([path, *argv[1:]]) if path else None,
            }
            self.logger.debug(f"Toolchain: {command} -> {path or 'not found'}")
        return info

    def _get_version(self, argv: List[str]) -> Optional[str]:
        """Get the first line of `<compiler> --version`"""
        path = argv[0]
        try:
            result = subprocess.run(
                [*argv, "--version"],
                capture_output=True,
                text=True,
                timeout=10,
                check=False
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self.logger.debug(f"Failed to query {path} --version: {e}")
            return None

        if result.returncode != 0 or not result.stdout:
            return None
        return result.stdout.splitlines()[0].strip()

    def missing(self, commands: Iterable[str]) -> list:
        """Get the commands that do not resolve on PATH"""
        return [c for c in dict.fromkeys(commands) if shutil.which(shlex.split(c)[0]) is None]


__all__ = ["ToolchainDetector"]
