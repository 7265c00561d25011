"""Native functions pre-loaded into the global environment."""

import time
from typing import Any, List

from loxi.builtin_function import BuiltinFunction
from loxi.environment import Environment
from .io import BasicIO, populate_io_environment


def populate_standard_environment(env: Environment, basic_io: BasicIO) -> Environment:
    def std_clock(args: List[Any]) -> Any:
        return float(time.monotonic())

    env.define('clock', BuiltinFunction('clock', 0, std_clock))
    populate_io_environment(env, basic_io)
    return env


__all__ = ['BasicIO', 'populate_standard_environment']
