"""
C compiler driver
"""

from .base_compiler import BaseCompiler


class CCompiler(BaseCompiler):
    """Compiles C sources, and every file not claimed by the C++ compiler"""

    language = "c"
    default_command = "gcc"
