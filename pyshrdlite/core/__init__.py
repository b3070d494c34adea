""" Core pyshrdlite module.

This module contains all the tools for world representation
(e.g. objects, relations, worlds and the physics that govern them),
as well as the commands consumed from a parser, and tools for
importing worlds from YAML files.
"""

from .commands import *
from .exceptions import *
from .physics import *
from .relations import *
from .types import *
from .world import *
from .yaml_utils import *
