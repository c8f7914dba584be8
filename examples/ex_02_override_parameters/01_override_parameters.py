"""Override parameters: supply values for parameters that are not classes.

Values are matched by parameter name. Parameters without a supplied value
fall back to their defaults. Untyped parameters can be bound to classes by
name with ``register_param_to_class``.
"""

from __future__ import annotations

from sigwire import Container, SigWireResolutionError


class Clock:
    def now(self) -> str:
        return "12:00"


class Mailer:
    def __init__(self, clock: Clock, host: str, port: int = 25) -> None:
        self.clock = clock
        self.host = host
        self.port = port


class Newsletter:
    def __init__(self, mailer) -> None:  # noqa: ANN001
        self.mailer = mailer


def main() -> None:
    container = Container()

    try:
        container.get_instance(Mailer)
    except SigWireResolutionError as error:
        print(f"missing={error.parameter_name}")  # => missing=host

    container.register_class(Mailer, {"host": "smtp.example.com"})
    mailer = container.get_instance(Mailer)
    print(f"mailer={mailer.host}:{mailer.port}")  # => mailer=smtp.example.com:25
    print(f"clock={mailer.clock.now()}")  # => clock=12:00

    container.register_param_to_class("constructor", {"mailer": Mailer})
    newsletter = container.get_instance(Newsletter)
    print(f"newsletter_host={newsletter.mailer.host}")  # => newsletter_host=smtp.example.com


if __name__ == "__main__":
    main()
