"""
Source package initialization.
"""

from . import config
from . import mail_intelligence
from . import utils

__all__ = [
    'config',
    'mail_intelligence',
    'utils'
]
