""" Schema kinds """

from .strings import *
from .numbers import *
from .boolean import *
from .values import *
from .iterables import *
from .mappings import *
from .objects import *
from .predicates import *
from .wrappers import *
from .files import *
from .types import *

from . import strings, numbers, boolean, values, iterables, mappings, objects, predicates, wrappers, files, types

__all__ = strings.__all__ + numbers.__all__ + boolean.__all__ + values.__all__ + iterables.__all__ + \
          mappings.__all__ + objects.__all__ + predicates.__all__ + wrappers.__all__ + files.__all__ + types.__all__
