"""Static reflection for WGSL shaders."""

from wgslr.reflector import reflect, reflect_file
from wgslr.analysis.model import (
    Binding, EntryPoints, Function, Input, InputAttribute, Reflection, Structure,
)
from wgslr.errors import ReflectionError

__version__ = "0.1.0"
