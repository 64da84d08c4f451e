#!/usr/bin/env python3
"""
Main entry point for dircompile
Compiles every regular file of a directory into a freshly recreated build directory
"""

import argparse
import fnmatch
import json
import shutil
import sys
from pathlib import Path
from typing import Optional, List, Dict, Any, Iterator

from .compilers import CCompiler, CxxCompiler, CompilerSelector
from .config import ConfigLoader
from .exceptions import DirCompileError, ConfigurationError, BuildDirectoryError
from .toolchain import ToolchainDetector
from .utils import Logger, BuildReport, CompileResult


class DirectoryCompiler:
    """Compiles each file of a source directory into its own executable"""

    def __init__(self,
                 source_dir: Optional[Path] = None,
                 build_dir: Optional[Path] = None,
                 config: Optional[ConfigLoader] = None,
                 verbose: bool = False,
                 dry_run: bool = False,
                 logger: Optional[Logger] = None):
        """
        Initialize the directory compiler

        Args:
            source_dir: Directory holding the sources (default: cwd)
            build_dir: Output directory (default: <source_dir>/build)
            config: Preloaded configuration; mutually exclusive with
                source_dir/build_dir
            verbose: Enable verbose output
            dry_run: Log compiler invocations without running them
            logger: Logger instance, created when omitted
        """
        if config is None:
            config = ConfigLoader(overrides={
                "source_dir": str(source_dir) if source_dir is not None else None,
                "build_dir": str(build_dir) if build_dir is not None else None,
            })
        elif source_dir is not None or build_dir is not None:
            raise ValueError("Pass either config or source_dir/build_dir, not both")

        self.config = config
        self.verbose = verbose
        self.dry_run = dry_run
        self.logger = logger or Logger(verbose=verbose, log_file=config.get("log_file"))

        self.source_dir = config.source_dir.resolve()
        # abspath, not resolve: a symlinked build dir is replaced, never followed
        self.build_dir = config.build_dir
        if not self.source_dir.is_dir():
            raise ConfigurationError(f"Source directory not found: {self.source_dir}")
        resolved_build_dir = self.build_dir.resolve()
        if resolved_build_dir == self.source_dir or resolved_build_dir in self.source_dir.parents:
            raise ConfigurationError(
                f"Build directory {self.build_dir} would remove the sources in {self.source_dir}")

        flags = config.get_flags()
        self.selector = CompilerSelector(
            c_compiler=CCompiler(config.get("c_compiler"), flags, self.logger, dry_run),
            cxx_compiler=CxxCompiler(config.get("cxx_compiler"), flags, self.logger, dry_run),
            cxx_extensions=config.get("cxx_extensions"),
            match_mode=config.get("match_mode"),
        )
        self.toolchain = ToolchainDetector(self.logger)

    def _excluded_names(self) -> List[str]:
        """Files dircompile itself owns in the source directory"""
        names = []
        for path in (self.config.config_file, self.config.get("log_file")):
            if path is not None and Path(path).resolve().parent == self.source_dir:
                names.append(Path(path).name)
        return names

    def check_prerequisites(self) -> bool:
        """
        Check if both compilers resolve on PATH

        Missing compilers are not fatal; the files they would build fail.

        Returns:
            True if all compilers were found
        """
        commands = [self.selector.c_compiler.command, self.selector.cxx_compiler.command]
        missing = self.toolchain.missing(commands)
        for command in missing:
            self.logger.warning(f"Compiler not found on PATH: {command}")
        return not missing

    def prepare_build_dir(self) -> None:
        """Remove the build directory if present and recreate it empty"""
        path = self.build_dir
        try:
            if path.is_symlink() or path.is_file():
                self.logger.debug(f"Removing {path}")
                path.unlink()
            elif path.exists():
                self.logger.debug(f"Removing {path}")
                shutil.rmtree(path)
            path.mkdir(parents=True)
        except OSError as e:
            raise BuildDirectoryError(path, f"Cannot recreate build directory ({e.strerror or e})") from e

    def iter_sources(self) -> Iterator[Path]:
        """
        Iterate over the regular files of the source directory

        Subdirectories are skipped silently.

        Yields:
            Source file paths in name order
        """
        patterns = list(self.config.get("exclude")) + self._excluded_names()
        for path in sorted(self.source_dir.iterdir()):
            if not path.is_file():
                continue
            if any(fnmatch.fnmatchcase(path.name, p) for p in patterns):
                self.logger.debug(f"Skipping excluded file {path.name}")
                continue
            yield path

    def output_path(self, source: Path) -> Path:
        """Get the executable path for a source file"""
        return self.build_dir / f"{source.name}{self.config.get('output_suffix')}"

    def compile_file(self, source: Path) -> CompileResult:
        """
        Compile one source file into the build directory

        Args:
            source: Source file path

        Returns:
            CompileResult for the file
        """
        self.logger.raw(source.name)
        compiler = self.selector.select(source.name)
        self.logger.debug(f"{source.name}: using {compiler}")
        return compiler.compile(source, self.output_path(source), cwd=self.source_dir)

    def run(self) -> BuildReport:
        """
        Recreate the build directory and compile every source file

        Returns:
            BuildReport with one result per file
        """
        self.logger.info(f"Compiling {self.source_dir} into {self.build_dir}")
        self.prepare_build_dir()

        report = BuildReport(build_dir=self.build_dir)
        for source in self.iter_sources():
            report.add(self.compile_file(source))

        if report.success:
            self.logger.success(report.summary())
        else:
            self.logger.error(report.summary())
        return report

    def clean(self) -> bool:
        """
        Remove the build directory

        Returns:
            True if the build directory is gone
        """
        if not self.build_dir.exists() and not self.build_dir.is_symlink():
            self.logger.info(f"Nothing to clean: {self.build_dir}")
            return True

        self.logger.info(f"Removing build directory: {self.build_dir}")
        if self.dry_run:
            return True
        try:
            if self.build_dir.is_dir() and not self.build_dir.is_symlink():
                shutil.rmtree(self.build_dir)
            else:
                self.build_dir.unlink()
        except OSError as e:
            self.logger.error(f"Failed to remove {self.build_dir}: {e}")
            return False
        return True

    def get_info(self) -> Dict[str, Any]:
        """Get configuration and toolchain information"""
        from . import __version__

        commands = [self.selector.c_compiler.command, self.selector.cxx_compiler.command]
        return {
            "version": __version__,
            "source_dir": str(self.source_dir),
            "build_dir": str(self.build_dir),
            "config_file": str(self.config.config_file) if self.config.config_file else None,
            "flags": self.config.get_flags(),
            "match_mode": self.selector.match_mode,
            "cxx_extensions": self.selector.cxx_extensions,
            "toolchain": self.toolchain.detect(commands),
        }

    def show_info(self) -> None:
        """Show configuration and toolchain information"""
        info = self.get_info()

        print(f"\ndircompile v{info['version']}")
        print(f"{'='*50}")
        print(f"Source Directory: {info['source_dir']}")
        print(f"Build Directory: {info['build_dir']}")
        print(f"Config File: {info['config_file'] or '(none)'}")
        print(f"Flags: {' '.join(info['flags'])}")
        print(f"C++ match: {info['match_mode']} {', '.join(info['cxx_extensions'])}")
        print("\nToolchain:")
        for command, tool in info["toolchain"].items():
            if tool["path"]:
                status = f"[OK] {tool['version'] or tool['path']}"
            else:
                status = "[X] Not found"
            print(f"  - {command:20} {status}")


def main(argv: Optional[List[str]] = None):
    """Command-line interface"""
    parser = argparse.ArgumentParser(
        prog="dircompile",
        description="Compile every file in a directory with gcc/g++ into a fresh build directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Build ./* into ./build
  %(prog)s build --source-dir src   # Build src/* into src/build
  %(prog)s build --match-mode literal
  %(prog)s clean                    # Remove the build directory
  %(prog)s info                     # Show configuration and toolchain
        """
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="build",
        choices=["build", "clean", "info"],
        help="Command to execute (default: build)"
    )

    parser.add_argument(
        "--source-dir",
        type=Path,
        help="Directory containing the sources (default: current directory)"
    )

    parser.add_argument(
        "--build-dir",
        type=Path,
        help="Output directory, relative to the source directory (default: build)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file (default: dircompile.yaml in the source directory)"
    )

    parser.add_argument(
        "--cc",
        help="C compiler command, e.g. \"ccache gcc\" (default: gcc)"
    )

    parser.add_argument(
        "--cxx",
        help="C++ compiler command (default: g++)"
    )

    parser.add_argument(
        "-O", "--optimization",
        help="Optimization level passed as -O<level> (default: 2)"
    )

    parser.add_argument(
        "--match-mode",
        choices=["suffix", "literal"],
        help="How file names select the C++ compiler (default: suffix)"
    )

    parser.add_argument(
        "--log-file",
        help="Also write debug logs to this file"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the build report as JSON"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show compiler invocations without running them"
    )

    args = parser.parse_args(argv)

    try:
        config = ConfigLoader(
            config_file=args.config,
            overrides={
                "source_dir": str(args.source_dir) if args.source_dir else None,
                "build_dir": str(args.build_dir) if args.build_dir else None,
                "c_compiler": args.cc,
                "cxx_compiler": args.cxx,
                "optimization": args.optimization,
                "match_mode": args.match_mode,
                "log_file": args.log_file,
            },
        )
        dc = DirectoryCompiler(config=config, verbose=args.verbose, dry_run=args.dry_run)
    except (DirCompileError, OSError) as e:
        print(f"Error initializing dircompile: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "build":
            dc.check_prerequisites()
            report = dc.run()
            if args.json:
                print(json.dumps(report.to_dict(), indent=2))
            sys.exit(report.exit_code)

        elif args.command == "clean":
            sys.exit(0 if dc.clean() else 1)

        elif args.command == "info":
            if args.json:
                print(json.dumps(dc.get_info(), indent=2))
            else:
                dc.show_info()

    except KeyboardInterrupt:
        print("\nBuild interrupted by user", file=sys.stderr)
        sys.exit(130)
    except DirCompileError as e:
        dc.logger.error(str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
