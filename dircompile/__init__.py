"""
dircompile
Compiles every file of a directory with gcc/g++ into a freshly recreated build directory
"""

__version__ = "1.0.0"

from .main import DirectoryCompiler

__all__ = ["DirectoryCompiler", "__version__"]
