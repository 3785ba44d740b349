"""Shared LBaaS enums and query option names."""

from enum import Enum


class Mode(str, Enum):
    """Balancing mode of a backend or frontend."""

    TCP = "tcp"
    HTTP = "http"


class State(str, Enum):
    """Deployment state of an LBaaS resource as reported by the engine."""

    UPDATING = "0"
    UPDATED = "1"
    DEPLOYMENT_ERROR = "2"
    DEPLOYED = "3"
    NEWLY_CREATED = "4"


OPT_NAME_SEARCH = "search"
OPT_NAME_FILTER = "filter"
