from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass(eq=False)
class BuiltinFunction:
    name: str
    arity: Optional[int]  # None means variadic
    fn: Callable[[List[Any]], Any]

    def call(self, interpreter: Any, args: List[Any]) -> Any:
        return self.fn(args)

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"

    def __str__(self) -> str:
        return f"<native fn {self.name}>"
