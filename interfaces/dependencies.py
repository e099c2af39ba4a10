"""FastAPI dependency injection integration with Lagom."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from lagom import Container

from infrastructure.config import get_settings
from infrastructure.di.container import create_container


@lru_cache
def get_container() -> Container:
    """Build the process-wide container from the cached settings.

    Tests replace it through ``app.dependency_overrides``.
    """
    return create_container(get_settings())


ContainerDep = Annotated[Container, Depends(get_container)]
