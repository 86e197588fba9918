# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Names and keys shared by the resolver, the values layer and the validation harness.
"""

import enum
import os

from .errors import ContractViolation


class ClusterRole(str, enum.Enum):
    """The two managed clusters of a Regional-DR pair."""

    PRIMARY = "primary"
    SECONDARY = "secondary"

    @classmethod
    def parse(cls, role):
        """
        Convert a role name (or an existing ClusterRole) into a ClusterRole.

        Raises:
            ContractViolation: if role is not 'primary' or 'secondary'
        """
        if isinstance(role, cls):
            return role
        try:
            return cls(role)
        except ValueError:
            raise ContractViolation(
                f"Unknown cluster role {role!r}, expected one of: {', '.join(r.value for r in cls)}"
            ) from None


# Top-level install-config keys accepted by the installer, in output order.
ALLOWED_INSTALL_CONFIG_KEYS = (
    "apiVersion",
    "baseDomain",
    "metadata",
    "controlPlane",
    "compute",
    "networking",
    "platform",
    "publish",
    "pullSecret",
    "sshKey",
)

# Keys the installer rejects inside platform.<provider>.
DISALLOWED_PLATFORM_KEYS = frozenset({"vpc"})

DEFAULT_API_VERSION = "v1"

# Static baseDomain written into the packaged fallback files.
DEFAULT_BASE_DOMAIN = "cluster.example.com"
DEFAULT_CLUSTER_DOMAIN = "cluster.example.com"

DEFAULT_CLUSTER_NAMES = {
    ClusterRole.PRIMARY: "ocp-primary",
    ClusterRole.SECONDARY: "ocp-secondary",
}

# Chart values keys
REGIONAL_DR_KEY = "regionalDR"
CLUSTER_OVERRIDES_KEY = "clusterOverrides"
INSTALL_CONFIG_KEY = "install_config"

CLUSTER_DOMAIN_ENV = "RDR_CLUSTER_DOMAIN"

FILES_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "files")
CHART_VALUES_FILE = os.path.join(FILES_DIR, "values.yaml")
FALLBACK_FILE_TEMPLATE = "default-{role}-install-config.json"
