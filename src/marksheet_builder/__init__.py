"""Marksheet builder: academic performance aggregation and credentialing."""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_names
from .data import *  # noqa: F401,F403
from .data import __all__ as _data_names
from .marksheet_generator import MarksheetGenerator, build_marksheet

__version__ = "0.1.0"

__all__ = list(_core_names) + list(_data_names) + ["MarksheetGenerator", "build_marksheet"]
