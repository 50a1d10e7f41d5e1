"""
Host platform detection.
"""
import sys
from enum import Enum
from typing import Optional


class BindPathPolicy(str, Enum):
    """How a local socket endpoint is turned into a bind-mount source."""

    SOCKET_FILE = "socket-file"  # bind the socket file itself
    PARENT_DIRECTORY = "parent-directory"  # bind the directory holding the socket


def is_windows_host(platform_name: Optional[str] = None) -> bool:
    """
    Returns True for Windows-family hosts.

    Args:
        platform_name: Value to test instead of sys.platform.
    """
    name = platform_name if platform_name is not None else sys.platform
    return name.startswith("win") or name == "cygwin"


def detect_bind_path_policy(platform_name: Optional[str] = None) -> BindPathPolicy:
    """
    Select the bind path policy for the host. Windows cannot bind-mount a
    single socket file, so the parent directory is mounted there instead.
    """
    if is_windows_host(platform_name):
        return BindPathPolicy.PARENT_DIRECTORY
    return BindPathPolicy.SOCKET_FILE
