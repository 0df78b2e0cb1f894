from rbnforge.exceptions import *
from rbnforge.utils import *
from rbnforge.randomness import *
from rbnforge.truth_table import *
from rbnforge.wiring_diagram import *
from rbnforge.network import *
from rbnforge.generate import *
from rbnforge.rbn import *

try:
    from rbnforge._version import __version__
except ImportError:
    __version__ = 'unknown'
