"""
Runtime support: error model and strkey codec.

The Address type lives in ``runtime.address`` and is imported from there,
since it depends on the XDR records.
"""

from .errors import *  # noqa: F401,F403
from .errors import __all__ as _errors_all
from . import strkey

__all__ = list(_errors_all) + ["strkey"]
