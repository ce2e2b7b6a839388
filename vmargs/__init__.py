__title__ = 'vmargs'
__license__ = 'MIT'
__version__ = "0.1.0"

import logging

from .arguments import *
from .catalog import *
from .commands import *
from .faults import *
from .tokens import *
from .validator import *
from .values import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every submodule
__all__ += arguments.__all__  # type: ignore[attr-defined]
__all__ += catalog.__all__  # type: ignore[attr-defined]
__all__ += commands.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += tokens.__all__  # type: ignore[attr-defined]
__all__ += validator.__all__  # type: ignore[attr-defined]
__all__ += values.__all__  # type: ignore[attr-defined]
