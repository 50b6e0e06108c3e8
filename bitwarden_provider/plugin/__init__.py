"""
Terraform Plugin Layer

Provider, resources and data sources built on the tf plugin framework.
"""

from .data_sources import ProjectsDataSource, SecretsDataSource
from .provider import BitwardenProvider
from .resources import ProjectResource, SecretResource

__all__ = [
    "BitwardenProvider",
    "ProjectResource",
    "SecretResource",
    "ProjectsDataSource",
    "SecretsDataSource",
]
