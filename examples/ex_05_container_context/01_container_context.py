"""Container context: register before a container exists.

Registrations made through ``container_context`` are recorded and replayed
when a container is bound with ``set_current``.
"""

from __future__ import annotations

from sigwire import Container, container_context


class Settings:
    def __init__(self, env: str) -> None:
        self.env = env


container_context.register_class(Settings, {"env": "production"})


def main() -> None:
    container_context.set_current(Container())

    settings = container_context.get_instance(Settings)
    print(f"env={settings.env}")  # => env=production

    container_context.reset()


if __name__ == "__main__":
    main()
