from .general import *
from .log import *
