"""AST nodes designed for evaluation."""

from ._base import *
from ._literal import *
from ._ident import *
from ._assign import *
from ._send import *
from ._block import *
