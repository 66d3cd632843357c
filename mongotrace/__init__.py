from ._logger import configure_mongotrace_logger


# configure mongotrace logger before other modules log
configure_mongotrace_logger()  # noqa: E402

from ._monkey import patch  # noqa: E402
from ._monkey import patch_all  # noqa: E402
from ._version import __version__  # noqa: E402
from .settings._config import config  # noqa: E402


__all__ = [
    "patch",
    "patch_all",
    "config",
    "__version__",
]
