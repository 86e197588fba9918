# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Render install_configs under several values combinations and check the result.

Scenarios:
  1. Baseline: chart values only -> full install_config from the chart regionalDR.
  2. Chart + cluster-name overrides -> overridden names/regions, full structure.
  3. Chart + values-hub + overrides -> values-hub has no regionalDR, so the chart's is kept.
  4. values-hub + overrides -> chart defaults still load first; same as 3.
  5. Minimal regionalDR + overrides -> simulates an old values-hub that replaced regionalDR
     without install_config; the packaged fallback files keep install_config complete.
Then, without the fallback files, scenario 5 must produce a broken install_config, proving the
fallback files are required.

Each install_config is round-tripped through the install-config Secret, as cluster provisioning
reads it.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List

from .constants import CHART_VALUES_FILE, FILES_DIR, ClusterRole
from .defaults import load_fallbacks
from .merge import coalesce_values
from .render import decode_install_config_secret, install_config_secret
from .utils import log_header
from .validation import is_install_config_broken, validate_install_config
from .values import apply_set_values, load_values_files, load_yaml, resolve_values

MINIMAL_REGIONAL_DR = {
    "regionalDR": [
        {
            "name": "resilient",
            "clusters": {
                "primary": {"name": "ocp-primary"},
                "secondary": {"name": "ocp-secondary"},
            },
        }
    ]
}


@dataclass
class ScenarioResult:
    name: str
    passed: bool = True
    skipped: bool = False
    messages: List[str] = field(default_factory=list)

    def fail(self, message):
        self.passed = False
        self.messages.append(f"FAIL {message}")
        logging.error("  FAIL %s", message)

    def ok(self, message):
        self.messages.append(f"OK   {message}")
        logging.info("  OK   %s", message)


def _render(values, cluster_domain, fallbacks, settings):
    """Resolve the first regionalDR entry and return {role: install_config} as read back from the Secret."""
    values = apply_set_values(values, [f"global.clusterDomain={cluster_domain}"])
    regions = resolve_values(values, settings=settings, fallbacks=fallbacks)
    if not regions:
        return {}
    return {
        role: decode_install_config_secret(install_config_secret(resolved))
        for role, resolved in regions[0].clusters.items()
    }


def _check_required_fields(result, rendered, label):
    for role in ClusterRole:
        install_config = rendered.get(role)
        problems = validate_install_config(install_config)
        if problems:
            for problem in problems:
                result.fail(f"{role.value} ({label}): {problem}")
        else:
            result.ok(f"{role.value} ({label}): required fields present")


def _metadata_name(install_config):
    return ((install_config or {}).get("metadata") or {}).get("name")


def _region(install_config):
    platform = (install_config or {}).get("platform") or {}
    for provider in platform.values():
        if isinstance(provider, dict) and provider.get("region"):
            return provider["region"]
    return None


def _missing(result, *paths):
    missing = [p for p in paths if not os.path.exists(p)]
    for path in missing:
        result.fail(f"values file not found: {path}")
    return bool(missing)


def run_scenarios(overrides, values_hub, cluster_domain, chart_values=CHART_VALUES_FILE,
                  files_dir=FILES_DIR, settings=None):
    """
    Run every rendering scenario.

    Args:
        overrides (str): Path to the cluster-name overrides values file
        values_hub (str): Path to values-hub.yaml
        cluster_domain (str): Value for global.clusterDomain
        chart_values (str): Path to the chart's values.yaml
        files_dir (str): Directory holding default-<role>-install-config.json
        settings (ResolverSettings): Injected resolver defaults

    Returns:
        list[ScenarioResult]
    """
    fallbacks = load_fallbacks(files_dir)
    results = []

    log_header("Scenario 1: Baseline (chart values only)")
    result = ScenarioResult("baseline")
    if not _missing(result, chart_values):
        rendered = _render(load_values_files([chart_values], chart_values), cluster_domain, fallbacks, settings)
        _check_required_fields(result, rendered, "baseline")
        names = (_metadata_name(rendered.get(ClusterRole.PRIMARY)), _metadata_name(rendered.get(ClusterRole.SECONDARY)))
        logging.info("  Primary metadata.name:   %s", names[0])
        logging.info("  Secondary metadata.name: %s", names[1])
        if names != ("ocp-primary", "ocp-secondary"):
            result.fail(f"baseline: expected ocp-primary / ocp-secondary, got {names[0]} / {names[1]}")
    results.append(result)

    log_header("Scenario 2: Chart + {}", os.path.basename(overrides))
    result = ScenarioResult("chart+overrides")
    if not _missing(result, chart_values, overrides):
        rendered = _render(load_values_files([chart_values, overrides], chart_values), cluster_domain, fallbacks, settings)
        _check_required_fields(result, rendered, "chart+overrides")
        regions = (_region(rendered.get(ClusterRole.PRIMARY)), _region(rendered.get(ClusterRole.SECONDARY)))
        logging.info("  Primary region:   %s", regions[0])
        logging.info("  Secondary region: %s", regions[1])
        if not all(regions):
            result.fail("chart+overrides: regions should be set")
    results.append(result)

    log_header("Scenario 3: Chart + values-hub + overrides")
    result = ScenarioResult("chart+hub+overrides")
    if not _missing(result, chart_values, values_hub, overrides):
        rendered = _render(load_values_files([chart_values, values_hub, overrides], chart_values),
                           cluster_domain, fallbacks, settings)
        _check_required_fields(result, rendered, "chart+hub+overrides")
    results.append(result)

    log_header("Scenario 4: values-hub + overrides (chart defaults implicit)")
    result = ScenarioResult("hub+overrides")
    if not _missing(result, values_hub, overrides):
        rendered = _render(load_values_files([values_hub, overrides], chart_values), cluster_domain, fallbacks, settings)
        _check_required_fields(result, rendered, "hub+overrides")
    results.append(result)

    log_header("Scenario 5: Minimal regionalDR + overrides (uses fallback install_config files)")
    result = ScenarioResult("minimal+overrides")
    minimal_values = None
    if not _missing(result, overrides):
        minimal_values = coalesce_values(coalesce_values(load_values_files([], chart_values), MINIMAL_REGIONAL_DR),
                                         load_yaml(overrides))
        rendered = _render(minimal_values, cluster_domain, fallbacks, settings)
        _check_required_fields(result, rendered, "minimal regionalDR+overrides")
        for role in ClusterRole:
            logging.info("  %s metadata.name: %s, region: %s", role.value,
                         _metadata_name(rendered.get(role)), _region(rendered.get(role)))
    results.append(result)

    log_header("Validate: fallback files prevent a broken install_config when regionalDR is minimal")
    result = ScenarioResult("fallback-required")
    if len(fallbacks) < len(ClusterRole):
        result.skipped = True
        result.messages.append("SKIP fallback install_config files not found")
        logging.warning("  SKIP fallback install_config files not found in %s", files_dir)
    elif minimal_values is None:
        result.fail("cannot check fallback files without the overrides file")
    else:
        rendered = _render(minimal_values, cluster_domain, {}, settings)
        if is_install_config_broken(rendered.get(ClusterRole.PRIMARY)):
            result.ok("without fallback files install_config has nulled/empty sections as expected")
        else:
            result.fail("without fallback files install_config was still full; fallback files may be redundant")
    results.append(result)

    return results
