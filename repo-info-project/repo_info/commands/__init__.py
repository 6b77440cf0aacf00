# This file makes the 'commands' directory a Python package
# Importing command modules from here

from . import show
from . import locate
from . import describe
from . import tags
from . import log
