# pyright: standard

"""branch-db-switcher: branch_db_switcher/endpoint/__init__.py."""

from ..__logger__ import logger
from ..config import Config

from .common import Endpoint
from .docker import DockerEndpoint
from .local import LocalEndpoint

__all__ = ["Endpoint", "DockerEndpoint", "LocalEndpoint", "choose_endpoint"]


def choose_endpoint(config: Config, local=False, workdir=None) -> Endpoint:
    """
    Chooses the endpoint storing artifacts for an action.

    Args:
        config (Config): Configuration for the current invocation.
        local (bool): If True, artifacts live in the working directory.
        workdir (Path): Overrides the working directory.

    Returns:
        Endpoint: An instance of the appropriate `Endpoint` subclass.
    """
    endpoint_class = LocalEndpoint if local else DockerEndpoint
    logger.debug("Creating endpoint: %s", endpoint_class.__name__)
    return endpoint_class(config, workdir=workdir)
