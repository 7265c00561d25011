from .basic_io import BasicIO
from loxi.builtin_function import BuiltinFunction
from loxi.environment import Environment
from loxi.types import VARIADIC
from typing import List, Any


def populate_io_environment(env: Environment, basic_io: BasicIO) -> Environment:
    def std_print(args: List[Any]) -> Any:
        basic_io.write_values(args)
        return None

    def std_input(args: List[Any]) -> Any:
        return basic_io.read_line()

    env.define('print', BuiltinFunction('print', VARIADIC, std_print))
    env.define('input', BuiltinFunction('input', 0, std_input))

    return env
