"""BMC connection strings and the ipmitool command line built from them.

A connection string looks like ``USER:PASS@TRANSPORT(HOST)``, for example
``USERID:PASSW0RD@lan(192.168.1.1)``. Parsing is lenient: whatever cannot be
resolved is left empty so one bad entry never stops the other servers from
being collected. Whether the result is usable is decided by build_command().
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ...errors import ConfigError

# Subcommand printing the sensor data repository as NAME | READING | STATUS rows
SDR_SUBCOMMAND = "sdr"


@dataclass
class Connection:
    """Credentials, transport and host of one remote BMC"""
    username: str = ""
    password: str = field(default="", repr=False)
    transport: str = ""
    host: str = ""

    @classmethod
    def parse(cls, server: str) -> "Connection":
        conn = cls()
        server = (server or "").strip()

        credentials, at, target = server.partition("@")
        if not at:
            credentials, target = "", credentials

        conn.username, _, conn.password = credentials.partition(":")

        transport, paren, host = target.partition("(")
        if paren:
            conn.transport = transport.strip()
            host = host.strip()
            conn.host = host[:-1] if host.endswith(")") else host
        else:
            conn.host = target.strip()
        return conn

    def __str__(self) -> str:
        return f"{self.username}@{self.transport}({self.host})"


def parse_connection(server: str) -> Connection:
    return Connection.parse(server)


def build_command(tool_path: str, connection: Optional[Connection] = None,
                  privilege: Optional[str] = None) -> List[str]:
    """
    Build the argv for one ``sdr`` dump.

    Local mode (no connection) talks to the BMC of this machine through the
    kernel driver. Remote mode passes the transport, host and credentials as
    ipmitool options. The flag names are ipmitool's and must not change.
    """
    if connection is None:
        return [tool_path, SDR_SUBCOMMAND]

    if not connection.host:
        raise ConfigError(f"connection string for {connection} has no host")
    if not connection.transport:
        raise ConfigError(f"connection string for {connection} has no transport, expected USER:PASS@TRANSPORT(HOST)")

    argv = [
        tool_path,
        "-I", connection.transport,
        "-H", connection.host,
        "-U", connection.username,
        "-P", connection.password,
    ]
    if privilege:
        argv += ["-L", privilege]
    argv.append(SDR_SUBCOMMAND)
    return argv
