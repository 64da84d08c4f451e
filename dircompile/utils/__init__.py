"""
Utility modules for dircompile
"""

import sys
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'SUCCESS': '\033[92m',  # Bright Green
        'RESET': '\033[0m'
    }

    def format(self, record):
        if getattr(record, 'raw', False):
            return record.getMessage()

        if sys.stdout.isatty():
            # Work on a copy so the file handler never sees escape codes
            record = logging.makeLogRecord(record.__dict__)
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            reset = self.COLORS['RESET']

            record.levelname = f"{color}{record.levelname}{reset}"
            record.msg = f"{color}{record.msg}{reset}"

        return super().format(record)


class Logger:
    """dircompile logger"""

    SUCCESS = 25  # Between INFO and WARNING

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger

        Args:
            verbose: Enable verbose output
            log_file: Optional log file path
        """
        self.verbose = verbose

        logging.addLevelName(self.SUCCESS, "SUCCESS")

        self.logger = logging.getLogger("dircompile")
        # The file handler records debug output even when the console does not
        self.logger.setLevel(logging.DEBUG if verbose or log_file else logging.INFO)
        self.logger.propagate = False

        # Remove existing handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

        if verbose:
            fmt = "%(asctime)s [%(levelname)s] %(message)s"
        else:
            fmt = "[%(levelname)s] %(message)s"

        console_handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S"))
        self.logger.addHandler(console_handler)

        # File handler
        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            self.logger.addHandler(file_handler)

    def debug(self, msg: str):
        """Log debug message"""
        self.logger.debug(msg)

    def info(self, msg: str):
        """Log info message"""
        self.logger.info(msg)

    def warning(self, msg: str):
        """Log warning message"""
        self.logger.warning(msg)

    def error(self, msg: str):
        """Log error message"""
        self.logger.error(msg)

    def success(self, msg: str):
        """Log success message"""
        self.logger.log(self.SUCCESS, msg)

    def raw(self, msg: str):
        """Log raw message without formatting"""
        record = self.logger.makeRecord(
            self.logger.name, logging.INFO, "", 0, msg, (), None
        )
        record.raw = True
        self.logger.handle(record)
        # Compiler diagnostics share the terminal; keep ordering stable
        for handler in self.logger.handlers:
            handler.flush()


@dataclass
class CompileResult:
    """Outcome of compiling a single source file"""
    source: Path
    output: Path
    compiler: str
    command: List[str]
    returncode: Optional[int]
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": str(self.source),
            "output": str(self.output),
            "compiler": self.compiler,
            "command": list(self.command),
            "returncode": self.returncode,
            "success": self.success,
            "error": self.error,
        }


@dataclass
class BuildReport:
    """Aggregate of every compile attempted during one run"""
    build_dir: Path
    results: List[CompileResult] = field(default_factory=list)

    def add(self, result: CompileResult):
        self.results.append(result)

    @property
    def succeeded(self) -> List[CompileResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[CompileResult]:
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        """True when no file failed (an empty run counts as success)"""
        return not self.failed

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    def summary(self) -> str:
        """
        Get a one line summary of the run

        Returns:
            Summary string
        """
        total = len(self.results)
        line = f"{len(self.succeeded)}/{total} compiled into {self.build_dir}"
        if self.failed:
            names = ", ".join(r.source.name for r in self.failed)
            line += f"; failed: {names}"
        return line

    def to_dict(self) -> Dict[str, Any]:
        return {
            "build_dir": str(self.build_dir),
            "success": self.success,
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "results": [r.to_dict() for r in self.results],
        }


__all__ = ["ColoredFormatter", "Logger", "CompileResult", "BuildReport"]
