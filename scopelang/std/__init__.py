"""The builtin library.

Each submodule builds an `Environment` holding its builtins; the root
frame of a run is a fresh merge of all of them, so separate runs never
share bindings.
"""

from scopelang.environment import Environment

from .core import populate_core_environment
from .io import BasicIO, populate_io_environment
from .lists import populate_list_environment
from .strings import populate_string_environment


def populate_standard_environment(basic_io: BasicIO) -> Environment:
    """Build a new root frame with every builtin registered."""
    root = Environment()
    for module_env in (
        populate_core_environment(),
        populate_list_environment(),
        populate_string_environment(),
        populate_io_environment(basic_io),
    ):
        root.values.update(module_env.values)
    return root
