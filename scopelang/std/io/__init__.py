from .basic_io import BasicIO
from scopelang.builtin_function import BuiltinFunction
from scopelang.environment import Environment
from scopelang.types import repr_value, to_string
from typing import List, Any


def populate_io_environment(basic_io: BasicIO) -> Environment:
    io_env = Environment()

    def std_println(args: List[Any]) -> Any:
        # one line per argument
        for arg in args:
            basic_io.write_line(to_string(arg))
        return True

    def std_print(args: List[Any]) -> Any:
        for arg in args:
            basic_io.write(to_string(arg))
        return True

    def std_dbg(args: List[Any]) -> Any:
        # quoted form, one line per argument
        for arg in args:
            basic_io.write_line(repr_value(arg))
        return True

    io_env.bind('println', BuiltinFunction('println', None, std_println))
    io_env.bind('print', BuiltinFunction('print', None, std_print))
    io_env.bind('dbg', BuiltinFunction('dbg', None, std_dbg))

    return io_env
