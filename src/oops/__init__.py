"""
Oops Language Implementation

A small dynamically typed language where every operation, control flow
included, is a message sent to an object.
"""

__version__ = "0.1.0"


from ._error import *
from ._selector import *
from ._value import *
from ._env import *
from ._classtable import *
from ._engine import *
from ._primitive import *
from ._dispatch import *
from . import ast
from ._parser import *
from ._interp import *
