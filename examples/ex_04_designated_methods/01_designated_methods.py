"""Designated methods: call a method right after construction.

A method can be registered with ``register_method`` or named by a ``CALL_ON``
class attribute. ``call_method`` returns what the method returns. Closures
are resolved the same way.
"""

from __future__ import annotations

from sigwire import Container


class Clock:
    def now(self) -> str:
        return "12:00"


class Report:
    CALL_ON = "render"

    def __init__(self, title: str = "Daily") -> None:
        self.title = title

    def render(self, clock: Clock, suffix: str = "") -> str:
        return f"{self.title} at {clock.now()}{suffix}"


def main() -> None:
    container = Container()
    print(container.call_method(Report))  # => Daily at 12:00

    container.register_method(Report, "render", {"suffix": "!"})
    print(container.call_method(Report))  # => Daily at 12:00!

    @container.register_closure("greet", parameters={"name": "Ada"})
    def greet(name: str, clock: Clock) -> str:
        return f"{clock.now()} hello {name}"

    print(container.call_closure("greet"))  # => 12:00 hello Ada


if __name__ == "__main__":
    main()
