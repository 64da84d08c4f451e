"""
Base compiler class that the C and C++ compilers inherit from
"""

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Any

from ..utils import CompileResult


class BaseCompiler:
    """Drives one external compiler command"""

    language = "c"
    default_command = "cc"

    def __init__(self,
                 command: Optional[str] = None,
                 flags: Optional[List[str]] = None,
                 logger: Any = None,
                 dry_run: bool = False):
        """
        Initialize compiler

        Args:
            command: Compiler command line, defaults to the class default.
                Split like a shell word list, so "ccache gcc" runs gcc
                through ccache
            flags: Flags appended after the output path
            logger: Logger instance
            dry_run: If True, don't actually run commands
        """
        self.command = command or self.default_command
        self.argv = shlex.split(self.command)
        self.flags = list(flags) if flags is not None else ["-O2"]
        self.logger = logger or logging.getLogger("dircompile")
        self.dry_run = dry_run

    def __repr__(self):
        return f"{type(self).__name__}({self.command!r}, language={self.language!r})"

    def is_available(self) -> bool:
        """Check whether the compiler resolves on PATH"""
        return shutil.which(self.argv[0]) is not None

    def build_command(self, source: Path, output: Path) -> List[str]:
        """
        Build the argument vector for one translation unit

        Args:
            source: Source file
            output: Executable to produce

        Returns:
            Command and arguments
        """
        return [*self.argv, str(source), "-o", str(output), *self.flags]

    def run_command(self,
                    cmd: List[str],
                    cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
        """
        Run a command with logging

        Output is not captured so compiler diagnostics reach the terminal.

        Args:
            cmd: Command and arguments
            cwd: Working directory

        Returns:
            CompletedProcess instance
        """
        cmd_str = " ".join(str(c) for c in cmd)
        self.logger.debug(f"Running: {cmd_str}")
        if cwd is not None:
            self.logger.debug(f"  in: {cwd}")

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would run: {cmd_str}")
            return subprocess.CompletedProcess(cmd, 0, "", "")

        return subprocess.run(cmd, cwd=cwd, check=False)

    def compile(self, source: Path, output: Path, cwd: Optional[Path] = None) -> CompileResult:
        """
        Compile a source file into an executable

        A compiler that exits non-zero or cannot be launched yields a failed
        result instead of raising.

        Args:
            source: Source file
            output: Executable to produce
            cwd: Working directory for the compiler

        Returns:
            CompileResult for this file
        """
        cmd = self.build_command(source, output)
        try:
            proc = self.run_command(cmd, cwd=cwd)
        except OSError as e:
            self.logger.error(f"Cannot run {self.command}: {e}")
            return CompileResult(source=source, output=output, compiler=self.command,
                                 command=cmd, returncode=None, error=str(e))

        error = None
        if proc.returncode != 0:
            error = f"{self.command} exited with status {proc.returncode}"
            self.logger.error(f"Compilation failed for {source.name}: {error}")
        return CompileResult(source=source, output=output, compiler=self.command,
                             command=cmd, returncode=proc.returncode, error=error)
