from typing import Any, Dict, Optional

from loxi.errors import RuntimeNameError


class Environment:
    """One lexical scope: a name -> value mapping plus its enclosing scope.

    The enclosing link is fixed at construction. Closures hold a reference to
    the environment they were created in, which keeps the whole chain above
    it alive for as long as the closure is reachable.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any) -> None:
        # Always binds in this scope, shadowing any enclosing binding.
        self.values[name] = value

    def get(self, name: str) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.enclosing
        raise RuntimeNameError(f"undefined variable '{name}'")

    def assign(self, name: str, value: Any) -> None:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return
            env = env.enclosing
        raise RuntimeNameError(f"undefined variable '{name}'")

    def ancestor(self, distance: int) -> 'Environment':
        env = self
        for _ in range(distance):
            env = env.enclosing
        return env

    def get_at(self, distance: int, name: str) -> Any:
        env = self.ancestor(distance)
        # resolved but never bound, e.g. declared in a branch that did not run
        if name not in env.values:
            raise RuntimeNameError(f"uninitialized variable '{name}'")
        return env.values[name]

    def assign_at(self, distance: int, name: str, value: Any) -> None:
        env = self.ancestor(distance)
        if name not in env.values:
            raise RuntimeNameError(f"uninitialized variable '{name}'")
        env.values[name] = value

    def __repr__(self) -> str:
        depth = 0
        env = self.enclosing
        while env is not None:
            depth += 1
            env = env.enclosing
        return f"<Environment depth={depth} names={sorted(self.values)}>"
