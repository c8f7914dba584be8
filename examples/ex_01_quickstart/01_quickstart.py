"""Quickstart: build an object graph by reading constructor signatures.

Only the top-level class is requested; every parameter typed with a
non-builtin class is built recursively.
"""

from __future__ import annotations

from sigwire import Container


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    container = Container()
    service = container.get_instance(UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database

    other = container.get_instance(UserService)
    print(f"new_instance={other is not service}")  # => new_instance=True


if __name__ == "__main__":
    main()
