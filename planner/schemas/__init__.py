"""
Pydantic schemas package
"""

from .common import *
from .auth import *
from .event import *
from .guest import *
from .seating import *
from .menu import *
from .planning import *
from .accommodation import *
from .website import *
