"""
Chooses the compiler for each source file
"""

from typing import List, Optional, Sequence

from ..exceptions import ConfigurationError
from .base_compiler import BaseCompiler

MATCH_MODES = ("suffix", "literal")


class CompilerSelector:
    """Maps a file name onto the C or C++ compiler"""

    def __init__(self,
                 c_compiler: BaseCompiler,
                 cxx_compiler: BaseCompiler,
                 cxx_extensions: Optional[Sequence[str]] = None,
                 match_mode: str = "suffix"):
        """
        Initialize selector

        Args:
            c_compiler: Compiler for everything not matched as C++
            cxx_compiler: Compiler for C++ sources
            cxx_extensions: Extensions selecting the C++ compiler
            match_mode: "suffix" matches names ending in an extension;
                "literal" compares the name against the text "*<ext>", so
                only a file actually named e.g. "*.cpp" matches
        """
        if match_mode not in MATCH_MODES:
            raise ConfigurationError(f"Unknown match mode: {match_mode}. "
                                     f"Supported: {', '.join(MATCH_MODES)}")
        self.c_compiler = c_compiler
        self.cxx_compiler = cxx_compiler
        self.cxx_extensions: List[str] = list(cxx_extensions or [".cpp"])
        self.match_mode = match_mode

    def is_cxx(self, name: str) -> bool:
        """
        Check whether a file name selects the C++ compiler

        Args:
            name: File name, without directory

        Returns:
            True for C++ sources
        """
        if self.match_mode == "literal":
            return any(name == f"*{ext}" for ext in self.cxx_extensions)
        return any(name.endswith(ext) for ext in self.cxx_extensions)

    def select(self, name: str) -> BaseCompiler:
        """Get the compiler for a file name"""
        return self.cxx_compiler if self.is_cxx(name) else self.c_compiler
