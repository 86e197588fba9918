# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Helm-style values handling: load and layer values files, apply --set assignments and pull the
resolver inputs (regionalDR declaration, cluster overrides, cluster domain) out of the result.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List

import yaml

from .constants import (
    CHART_VALUES_FILE,
    CLUSTER_OVERRIDES_KEY,
    REGIONAL_DR_KEY,
    ClusterRole,
)
from .errors import MalformedDocument
from .merge import coalesce_values
from .resolver import ResolvedCluster, resolve


@dataclass
class RegionResolution:
    """Resolved primary and secondary clusters of one regionalDR entry"""
    name: str
    clusters: Dict[ClusterRole, ResolvedCluster] = field(default_factory=dict)

    @property
    def primary(self):
        return self.clusters[ClusterRole.PRIMARY]

    @property
    def secondary(self):
        return self.clusters[ClusterRole.SECONDARY]


def load_yaml(file_path):
    """
    Load a YAML values file.

    An empty file yields an empty document. A missing file or invalid YAML raises, as with `helm -f`.

    Raises:
        OSError: if the file cannot be read
        yaml.YAMLError: if the file is not valid YAML
        MalformedDocument: if the top level is not a mapping
    """
    logging.debug("Loading values file: %s", file_path)
    with open(file_path, 'r', encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocument(file_path, data)
    return data


def load_values_files(paths=(), chart_values=CHART_VALUES_FILE):
    """
    Load the chart defaults and layer each values file over them, in order.

    The chart's own values.yaml always loads first, the same as `helm template`.
    """
    layers = []
    if chart_values and os.path.exists(chart_values):
        layers.append(chart_values)
    elif chart_values:
        logging.warning("Chart values file not found: %s", chart_values)
    layers.extend(paths)

    values = {}
    for path in layers:
        values = coalesce_values(values, load_yaml(path))
    logging.info("Loaded %d values layer(s): %s", len(layers), ", ".join(os.path.basename(p) for p in layers))
    return values


def parse_set_value(raw):
    """Convert a --set value to bool/int/null the way Helm does, otherwise keep the string."""
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


def apply_set_values(values, assignments):
    """
    Apply `key.path=value` assignments (the --set flag) and return the new values document.

    Raises:
        ValueError: if an assignment has no '='
    """
    overlay = {}
    for assignment in assignments or ():
        key, sep, raw = assignment.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid --set assignment '{assignment}', expected key=value")

        node = overlay
        parts = key.split(".")
        for part in parts[:-1]:
            # a deeper path replaces an earlier scalar at the same key
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = parse_set_value(raw)
        logging.debug("Set %s=%s", key, raw)

    return coalesce_values(values, overlay)


def get_cluster_domain(values):
    """global.clusterDomain, or None"""
    global_values = values.get("global") or {}
    if not isinstance(global_values, dict):
        return None
    return global_values.get("clusterDomain") or None


def get_regional_dr(values) -> List[dict]:
    """
    The regionalDR declaration: a list of regions, each with a name and clusters.primary/secondary.

    Raises:
        MalformedDocument: if regionalDR is present but is not a list of mappings
    """
    regions = values.get(REGIONAL_DR_KEY) or []
    if not isinstance(regions, list):
        raise MalformedDocument(REGIONAL_DR_KEY, regions)
    for index, region in enumerate(regions):
        if not isinstance(region, dict):
            raise MalformedDocument(f"{REGIONAL_DR_KEY}[{index}]", region)
    return regions


def get_region_cluster(region, role):
    clusters = region.get("clusters") or {}
    if not isinstance(clusters, dict):
        raise MalformedDocument(f"{region.get('name')}.clusters", clusters)
    return clusters.get(ClusterRole.parse(role).value)


def get_cluster_override(values, role):
    """clusterOverrides.<role>, or None"""
    overrides = values.get(CLUSTER_OVERRIDES_KEY) or {}
    if not isinstance(overrides, dict):
        raise MalformedDocument(CLUSTER_OVERRIDES_KEY, overrides)
    return overrides.get(ClusterRole.parse(role).value)


def resolve_values(values, settings=None, fallbacks=None):
    """
    Resolve both clusters of every regionalDR entry in a layered values document.

    Args:
        values (dict): Layered values (see load_values_files)
        settings (ResolverSettings): Injected defaults
        fallbacks (dict): ClusterRole -> fallback install_config (see defaults.load_fallbacks)

    Returns:
        list[RegionResolution]
    """
    fallbacks = fallbacks or {}
    cluster_domain = get_cluster_domain(values)
    results = []

    for region in get_regional_dr(values):
        region_name = region.get("name")
        resolution = RegionResolution(name=region_name)
        for role in ClusterRole:
            resolution.clusters[role] = resolve(
                role,
                base=get_region_cluster(region, role),
                fallback=fallbacks.get(role),
                override=get_cluster_override(values, role),
                cluster_domain=cluster_domain,
                region_name=region_name,
                settings=settings,
            )
        results.append(resolution)

    if not results:
        logging.warning("No %s entries found in values, nothing to resolve", REGIONAL_DR_KEY)
    return results
