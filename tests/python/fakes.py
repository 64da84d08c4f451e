"""Stand-in for subprocess.run that records compiler invocations"""
import subprocess
from pathlib import Path


class FakeToolchain:
    """Pretends to be gcc/g++; writes the -o target unless the source is broken"""

    def __init__(self, broken=(), missing=()):
        self.calls = []
        self.broken = set(broken)
        self.missing = set(missing)

    def __call__(self, cmd, cwd=None, check=False, **kwargs):
        self.calls.append((list(cmd), cwd))
        if cmd[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        if "-o" not in cmd:
            # e.g. `gcc --version` from toolchain detection
            return subprocess.CompletedProcess(cmd, 0, stdout=f"{cmd[0]} (fake) 1.0\n", stderr="")
        out_index = cmd.index("-o")
        if Path(cmd[out_index - 1]).name in self.broken:
            return subprocess.CompletedProcess(cmd, 1)
        output = Path(cmd[out_index + 1])
        output.write_text(f"built by {cmd[0]}")
        output.chmod(0o755)
        return subprocess.CompletedProcess(cmd, 0)

    def compilers_by_file(self):
        """Map source name to the compiler words placed before it"""
        result = {}
        for cmd, _ in self.calls:
            if "-o" in cmd:
                out_index = cmd.index("-o")
                result[Path(cmd[out_index - 1]).name] = " ".join(cmd[:out_index - 1])
        return result
