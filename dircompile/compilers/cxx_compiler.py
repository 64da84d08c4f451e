"""
C++ compiler driver
"""

from .base_compiler import BaseCompiler


class CxxCompiler(BaseCompiler):
    """Compiles C++ sources"""

    language = "c++"
    default_command = "g++"
