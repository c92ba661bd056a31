import time
from typing import Any, List

from lox.builtin_function import BuiltinFunction
from lox.environment import Environment


def populate_native_environment() -> Environment:
    """Build the environment of native functions installed as globals."""
    native_env = Environment()

    def std_clock(args: List[Any]) -> Any:
        return float(time.time_ns() // 1_000_000)

    native_env.define('clock', BuiltinFunction('clock', 0, std_clock))
    return native_env
