"""
Exceptions raised while collecting IPMI sensor data.

Every error carries the ``server`` it belongs to (the BMC host, or None for a
local invocation) so failures from several targets can be reported together
through AggregatedError.
"""

from typing import List, Optional, Sequence


class IpmiMonError(Exception):
    """Base exception for ipmimon"""

    def __init__(self, message: str, server: Optional[str] = None):
        self.message = message
        self.server = server
        super().__init__(message)

    def __str__(self) -> str:
        if self.server:
            return f"{self.server}: {self.message}"
        return self.message


class ConfigError(IpmiMonError):
    """Invalid configuration value or connection string that cannot be turned into a command"""


class ToolMissingError(IpmiMonError):
    """The IPMI utility was not found or is not executable"""

    def __init__(self, path: str, server: Optional[str] = None):
        self.path = path
        super().__init__(f"ipmi tool not found or not executable: {path}", server)


class CommandTimeoutError(IpmiMonError, TimeoutError):
    """The IPMI utility did not finish within the configured timeout"""

    def __init__(self, argv: Sequence[str], timeout: float, server: Optional[str] = None):
        self.argv = list(argv)
        self.timeout = timeout
        super().__init__(f"{argv[0]} timed out after {timeout:g}s", server)


class ToolError(IpmiMonError):
    """The IPMI utility exited with a non-zero status"""

    def __init__(self, argv: Sequence[str], returncode: int, stdout: bytes = b"",
                 stderr: bytes = b"", server: Optional[str] = None):
        self.argv = list(argv)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = (stderr or stdout).decode(errors="replace").strip()
        message = f"{argv[0]} exited with status {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, server)


class MalformedOutputError(ToolError):
    """The IPMI utility succeeded but printed no sensor table"""

    def __init__(self, stdout: bytes, server: Optional[str] = None):
        IpmiMonError.__init__(self, "output contains no sensor rows", server)
        self.argv = []
        self.returncode = 0
        self.stdout = stdout
        self.stderr = b""


class AggregatedError(IpmiMonError):
    """Failures from several collection targets in a single tick"""

    def __init__(self, errors: List[Exception]):
        self.errors = list(errors)
        summary = "; ".join(str(e) for e in self.errors)
        super().__init__(f"{len(self.errors)} of the ipmi targets failed: {summary}")
