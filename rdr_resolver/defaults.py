# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Packaged fallback install_configs (files/default-<role>-install-config.json).

The fallback files are generated from the install_config sections of the chart's values.yaml.
Regenerate them with `rdr-install-config update-defaults` whenever machine types, networking,
platform or other install_config defaults change in values.yaml.
"""

import copy
import json
import logging
import os

from .constants import (
    DEFAULT_BASE_DOMAIN,
    FALLBACK_FILE_TEMPLATE,
    FILES_DIR,
    INSTALL_CONFIG_KEY,
    REGIONAL_DR_KEY,
    ClusterRole,
)
from .errors import DefaultsError, MalformedDocument


def fallback_path(role, files_dir=FILES_DIR):
    role = ClusterRole.parse(role)
    return os.path.join(files_dir, FALLBACK_FILE_TEMPLATE.format(role=role.value))


def load_fallback(role, files_dir=FILES_DIR):
    """
    Load the fallback install_config for a role.

    Returns:
        dict | None: the install_config, or None when the file does not exist
    """
    path = fallback_path(role, files_dir)
    if not os.path.exists(path):
        logging.debug("%s does not exist", path)
        return None

    with open(path, 'r', encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise MalformedDocument(path, data)
    return data


def load_fallbacks(files_dir=FILES_DIR):
    """Load the fallback install_config of both roles; missing files are left out."""
    fallbacks = {}
    for role in ClusterRole:
        data = load_fallback(role, files_dir)
        if data is None:
            logging.warning("No fallback install_config for %s cluster in %s", role.value, files_dir)
            continue
        fallbacks[role] = data
    return fallbacks


def normalize_install_config(install_config, default_base_domain=DEFAULT_BASE_DOMAIN):
    """Copy install_config, replacing a templated baseDomain with the static default."""
    out = copy.deepcopy(install_config)
    base_domain = out.get("baseDomain")
    if isinstance(base_domain, str) and "{{" in base_domain:
        out["baseDomain"] = default_base_domain
    return out


def build_default_install_configs(values, default_base_domain=DEFAULT_BASE_DOMAIN):
    """
    Extract regionalDR[0].clusters.<role>.install_config for both roles from chart values.

    Raises:
        DefaultsError: if a role's install_config is missing
    """
    try:
        clusters = values[REGIONAL_DR_KEY][0]["clusters"]
        sections = {role: clusters[role.value][INSTALL_CONFIG_KEY] for role in ClusterRole}
    except (KeyError, IndexError, TypeError) as err:
        raise DefaultsError(
            f"could not find {REGIONAL_DR_KEY}[0].clusters.primary/secondary.{INSTALL_CONFIG_KEY} "
            f"in chart values: missing {err}"
        ) from err

    defaults = {}
    for role, section in sections.items():
        if not isinstance(section, dict) or not section:
            raise DefaultsError(f"{REGIONAL_DR_KEY}[0].clusters.{role.value}.{INSTALL_CONFIG_KEY} is empty")
        defaults[role] = normalize_install_config(section, default_base_domain)
    return defaults


def dump_install_config(install_config):
    return json.dumps(install_config, indent=2, sort_keys=False) + "\n"


def write_default_install_configs(values, files_dir=FILES_DIR, dry_run=False):
    """
    Write default-<role>-install-config.json for both roles from chart values.

    Returns:
        list[str]: paths written (or that would be written with dry_run)
    """
    defaults = build_default_install_configs(values)
    written = []

    for role, install_config in defaults.items():
        path = fallback_path(role, files_dir)
        content = dump_install_config(install_config)

        if dry_run:
            logging.info("--- %s (would write to %s) ---\n%s", role.value, path, content)
        else:
            os.makedirs(files_dir, exist_ok=True)
            with open(path, 'w', encoding="utf-8") as f:
                f.write(content)
            logging.info("Wrote %s", path)
        written.append(path)

    return written
