# Repositories package: SQLAlchemy adapters, in-memory adapters and the bundle
# that groups them for injection into services.

from .bundle import (
    RepositoryBundle,
    create_in_memory_repositories,
    create_sqlalchemy_repositories,
)

__all__ = [
    "RepositoryBundle",
    "create_in_memory_repositories",
    "create_sqlalchemy_repositories",
]
