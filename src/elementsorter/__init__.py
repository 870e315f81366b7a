"""Keep UI container children in order as items arrive or the sort changes.

Qt integration lives in ``elementsorter.components`` and is imported lazily
so the ordering engine stays usable headless.
"""

from .ordering import *  # noqa: F401,F403
from .ordering import __all__ as _ordering_all

__all__ = list(_ordering_all)
__version__ = "0.1.0"
