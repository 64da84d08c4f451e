"""
Compiler drivers and per-file compiler selection
"""

from .base_compiler import BaseCompiler
from .c_compiler import CCompiler
from .cxx_compiler import CxxCompiler
from .selector import CompilerSelector

__all__ = [
    "BaseCompiler",
    "CCompiler",
    "CxxCompiler",
    "CompilerSelector"
]
