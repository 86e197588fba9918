# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Resolver settings.

The resolver never reads module globals or the environment on its own; callers build a
ResolverSettings (usually through from_env) and pass it in.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from .constants import (
    CLUSTER_DOMAIN_ENV,
    DEFAULT_BASE_DOMAIN,
    DEFAULT_CLUSTER_DOMAIN,
    DEFAULT_CLUSTER_NAMES,
    ClusterRole,
)


@dataclass(frozen=True)
class ResolverSettings:
    """Defaults injected into every resolve() call"""
    default_cluster_domain: str = DEFAULT_CLUSTER_DOMAIN
    default_base_domain: str = DEFAULT_BASE_DOMAIN
    default_cluster_names: Dict[ClusterRole, str] = field(
        default_factory=lambda: dict(DEFAULT_CLUSTER_NAMES))
    # baseDomain values that mean "not set" and get replaced by the derived domain
    placeholder_base_domains: FrozenSet[str] = frozenset({DEFAULT_BASE_DOMAIN})
    # Paths replaced as a whole by a non-empty override instead of merged
    replace_paths: Tuple[Tuple[str, ...], ...] = (("compute",),)

    def default_name(self, role):
        return self.default_cluster_names[ClusterRole.parse(role)]

    def is_placeholder_base_domain(self, value):
        """True when a baseDomain is unset, empty, a known placeholder or an unrendered template."""
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        value = value.strip()
        return not value or "{{" in value or value in self.placeholder_base_domains

    @classmethod
    def from_env(cls, cluster_domain: Optional[str] = None):
        """
        Build settings, taking the default cluster domain from (in order) the explicit argument,
        the RDR_CLUSTER_DOMAIN environment variable, or the built-in default.
        """
        env_domain = os.getenv(CLUSTER_DOMAIN_ENV)
        domain = cluster_domain or env_domain or DEFAULT_CLUSTER_DOMAIN
        if cluster_domain:
            logging.debug("Default cluster domain from argument: %s", domain)
        elif env_domain:
            logging.debug("Default cluster domain from %s: %s", CLUSTER_DOMAIN_ENV, domain)
        return cls(default_cluster_domain=domain)
