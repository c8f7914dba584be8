"""Positional binding: supply override values in order.

After ``disable_named_parameter`` the values are consumed in order by the
parameters that are not built as class dependencies.
"""

from __future__ import annotations

from sigwire import Container


class Clock:
    pass


class Rectangle:
    def __init__(self, width: int, clock: Clock, height: int, label: str = "box") -> None:
        self.width = width
        self.clock = clock
        self.height = height
        self.label = label


def main() -> None:
    container = Container().disable_named_parameter()
    container.register_class(Rectangle, [3, 4])

    rectangle = container.get_instance(Rectangle)
    print(f"size={rectangle.width}x{rectangle.height}")  # => size=3x4
    print(f"label={rectangle.label}")  # => label=box
    print(f"clock={type(rectangle.clock).__name__}")  # => clock=Clock


if __name__ == "__main__":
    main()
