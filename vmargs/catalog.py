"""
vmargs launcher catalog: the fixed set of arguments accepted by the microVM launcher.

Arguments (flag : value : default)
- api-sock          : path           : /tmp/firecracker.socket
- id                : string         : anonymous-instance
- seccomp-level     : 0 | 1 | 2      : 2
- start-time-us     : numeric string : optional
- start-time-cpu-us : numeric string : optional
- no-api            : flag           : requires config-file
- config-file       : path           : optional
- extra-args        : everything after a bare '--', passed through verbatim
"""
import functools

from .arguments import ArgumentRegistry, ArgumentSpec

DEFAULT_API_SOCK_PATH = "/tmp/firecracker.socket"
DEFAULT_INSTANCE_ID = "anonymous-instance"
DEFAULT_SECCOMP_LEVEL = "2"
SECCOMP_LEVELS = ("0", "1", "2")

BANNER = "Launch and configure a microVM through a unix domain socket API."


@functools.cache
def build_registry():
    """
    Build the launcher registry (once per process; later calls return the same registry).
    """
    return ArgumentRegistry(
        ArgumentSpec(
            "api-sock",
            "Path to unix domain socket used by the API.",
            required=True,
            takes_value=True,
            default=DEFAULT_API_SOCK_PATH,
            metavar="PATH",
        ),
        ArgumentSpec(
            "id",
            "MicroVM unique identifier.",
            required=True,
            takes_value=True,
            default=DEFAULT_INSTANCE_ID,
            metavar="ID",
        ),
        ArgumentSpec(
            "seccomp-level",
            "Level of seccomp filtering.\n"
            "- Level 0: No filtering.\n"
            "- Level 1: Seccomp filtering by syscall number.\n"
            "- Level 2: Seccomp filtering by syscall number and argument values.",
            required=True,
            takes_value=True,
            default=DEFAULT_SECCOMP_LEVEL,
            choices=SECCOMP_LEVELS,
        ),
        ArgumentSpec(
            "start-time-us",
            takes_value=True,
            metavar="MICROSECONDS",
        ),
        ArgumentSpec(
            "start-time-cpu-us",
            takes_value=True,
            metavar="MICROSECONDS",
        ),
        ArgumentSpec(
            "no-api",
            "Optional parameter which allows starting and using a microVM without an active API socket.",
            requires="config-file",
        ),
        ArgumentSpec(
            "config-file",
            "Path to a file that contains the microVM configuration in JSON format.",
            takes_value=True,
            metavar="PATH",
        ),
        ArgumentSpec(
            "extra-args",
            "Arguments that will be passed verbatim to the exec file.",
            verbatim=True,
        ),
    )


__all__ = (
    "DEFAULT_API_SOCK_PATH",
    "DEFAULT_INSTANCE_ID",
    "DEFAULT_SECCOMP_LEVEL",
    "SECCOMP_LEVELS",
    "BANNER",
    "build_registry",
)
