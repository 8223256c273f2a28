__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'runfile'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .executor import *
from .faults import *
from .helper import *
from .invoker import *
from .lexer import *
from .locator import *
from .models import *
from .parser import *
from .pipeline import *
from .resolver import *
from .tokens import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the pipeline stages
__all__ += tokens.__all__  # type: ignore[attr-defined]
__all__ += lexer.__all__  # type: ignore[attr-defined]
__all__ += models.__all__  # type: ignore[attr-defined]
__all__ += parser.__all__  # type: ignore[attr-defined]
__all__ += resolver.__all__  # type: ignore[attr-defined]
__all__ += invoker.__all__  # type: ignore[attr-defined]
# Load the exposed API of the collaborators
__all__ += executor.__all__  # type: ignore[attr-defined]
__all__ += locator.__all__  # type: ignore[attr-defined]
__all__ += helper.__all__  # type: ignore[attr-defined]
__all__ += pipeline.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
