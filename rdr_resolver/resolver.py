# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Configuration resolver for the Regional-DR managed clusters.

Given the regional-DR declaration of one cluster (base), the packaged fallback install_config,
the caller's cluster override and the cluster domain, resolve() produces the ResolvedCluster
handed to cluster provisioning. The same function serves both roles; it does no I/O and keeps
no state, so primary and secondary can be resolved independently and in any order.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .constants import INSTALL_CONFIG_KEY, ClusterRole
from .errors import ContractViolation, MalformedDocument
from .merge import deep_merge
from .sanitize import sanitize
from .settings import ResolverSettings


@dataclass(frozen=True)
class ResolvedCluster:
    """
    Fully resolved cluster definition for one role.

    The install_config is held privately and every read returns a copy, so a ResolvedCluster
    cannot change after resolve() returns it. Hashing uses the identity fields only.
    """
    role: ClusterRole
    name: str
    version: Optional[str]
    cluster_group: Optional[str]
    _install_config: Dict[str, Any] = field(default_factory=dict, repr=False, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "_install_config", copy.deepcopy(self._install_config))

    @property
    def install_config(self) -> Dict[str, Any]:
        return copy.deepcopy(self._install_config)

    def to_dict(self):
        """Document in the field names and order consumed by cluster provisioning."""
        return {
            "name": self.name,
            "version": self.version,
            "clusterGroup": self.cluster_group,
            "install_config": self.install_config,
        }


def _as_document(layer, value):
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedDocument(layer, value)
    return value


def derive_base_domain(cluster_domain):
    """
    Drop the leftmost DNS label of cluster_domain.

    >>> derive_base_domain("rdr.apps.example.com")
    'apps.example.com'
    """
    return ".".join(cluster_domain.strip().strip(".").split(".")[1:])


def select_base_install_config(base_install_config, fallback):
    """
    Return the install_config to merge overrides onto.

    A base without controlPlane is treated as minimal and the fallback is used instead.
    """
    if "controlPlane" in base_install_config:
        return base_install_config
    if fallback:
        logging.debug("Base install_config has no controlPlane, using fallback defaults")
        return fallback
    if base_install_config:
        logging.warning("Base install_config has no controlPlane and no fallback is available")
    return base_install_config


def _first_set(*values):
    for value in values:
        if value not in (None, ""):
            return value
    return None


def resolve(role, base=None, fallback=None, override=None, cluster_domain=None,
            region_name=None, settings=None):
    """
    Resolve one cluster of the Regional-DR pair.

    Args:
        role (str | ClusterRole): 'primary' or 'secondary'
        base (dict): regionalDR[].clusters.<role> entry (name, version, clusterGroup, install_config)
        fallback (dict): complete install_config used when the base one has no controlPlane
        override (dict): clusterOverrides.<role> entry, same shape as base
        cluster_domain (str): cluster domain the baseDomain derives from
        region_name (str): name of the regionalDR entry, last resort for clusterGroup
        settings (ResolverSettings): injected defaults

    Returns:
        ResolvedCluster

    Raises:
        ContractViolation: for an unknown role or a cluster_domain that is not a string
        MalformedDocument: if a layer is not a mapping
    """
    role = ClusterRole.parse(role)
    if cluster_domain is not None and not isinstance(cluster_domain, str):
        raise ContractViolation(
            f"cluster_domain must be a string, got {type(cluster_domain).__name__}: {cluster_domain!r}")
    settings = settings or ResolverSettings()
    base = _as_document("base", base)
    override = _as_document("override", override)
    fallback = _as_document("fallback", fallback)

    base_install_config = _as_document(f"base.{INSTALL_CONFIG_KEY}", base.get(INSTALL_CONFIG_KEY))
    override_install_config = _as_document(f"override.{INSTALL_CONFIG_KEY}", override.get(INSTALL_CONFIG_KEY))

    effective_base = select_base_install_config(base_install_config, fallback)
    merged = deep_merge(effective_base, override_install_config, settings.replace_paths)
    install_config = sanitize(merged)

    if settings.is_placeholder_base_domain(install_config.get("baseDomain")):
        domain = cluster_domain or settings.default_cluster_domain
        install_config["baseDomain"] = derive_base_domain(domain)

    name = _first_set(override.get("name"), base.get("name"), settings.default_name(role))
    version = _first_set(override.get("version"), base.get("version"))
    cluster_group = _first_set(override.get("clusterGroup"), base.get("clusterGroup"), region_name)

    metadata = install_config.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
    if not metadata.get("name"):
        metadata["name"] = name
        install_config["metadata"] = metadata

    # re-project so keys added above land in allow-list order
    install_config = sanitize(install_config)

    logging.debug("Resolved %s cluster '%s' (clusterGroup=%s, version=%s)",
                  role.value, name, cluster_group, version)

    return ResolvedCluster(
        role=role,
        name=name,
        version=version,
        cluster_group=cluster_group,
        _install_config=install_config,
    )
