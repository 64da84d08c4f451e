"""Holds exceptions used by dircompile"""


class DirCompileError(Exception):
    """Base class for fatal dircompile errors"""


class ConfigurationError(DirCompileError):
    """Raised when the configuration is unreadable or invalid"""


class BuildDirectoryError(DirCompileError):
    """Raised when the build directory cannot be removed or created"""
    def __init__(self, path, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


__all__ = ["DirCompileError", "ConfigurationError", "BuildDirectoryError"]
