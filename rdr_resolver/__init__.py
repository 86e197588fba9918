# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""Install_config resolver for the Regional-DR primary and secondary clusters"""

from .constants import ClusterRole
from .errors import ContractViolation, DefaultsError, MalformedDocument, ResolverError
from .resolver import ResolvedCluster, derive_base_domain, resolve
from .sanitize import sanitize
from .settings import ResolverSettings

__version__ = "1.0.0"

__all__ = [
    "ClusterRole",
    "ContractViolation",
    "DefaultsError",
    "MalformedDocument",
    "ResolvedCluster",
    "ResolverError",
    "ResolverSettings",
    "derive_base_domain",
    "resolve",
    "sanitize",
]
