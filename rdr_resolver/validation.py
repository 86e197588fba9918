# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Structural checks on resolved install_configs.

The resolver always returns a document; deciding whether that document is complete enough to
provision a cluster happens here.
"""

import logging

from packaging import version as pkg_version


def _machine_types(install_config):
    """Yield every platform.<provider>.type set on controlPlane and the compute pools."""
    pools = []
    control_plane = install_config.get("controlPlane")
    if isinstance(control_plane, dict):
        pools.append(control_plane)
    compute = install_config.get("compute")
    if isinstance(compute, list):
        pools.extend(p for p in compute if isinstance(p, dict))

    for pool in pools:
        platform = pool.get("platform")
        if not isinstance(platform, dict):
            continue
        for provider in platform.values():
            if isinstance(provider, dict) and provider.get("type"):
                yield provider["type"]


def _has_region(install_config):
    platform = install_config.get("platform")
    if not isinstance(platform, dict):
        return False
    return any(isinstance(p, dict) and p.get("region") for p in platform.values())


def validate_install_config(install_config):
    """
    Check a resolved install_config for the fields cluster provisioning needs.

    Returns:
        list[str]: one message per problem; empty when the install_config is complete
    """
    problems = []
    install_config = install_config or {}

    if "compute" in install_config and not install_config["compute"]:
        problems.append("compute is empty")
    if "networking" in install_config and install_config["networking"] is None:
        problems.append("networking is null")
    if "publish" in install_config and install_config["publish"] is None:
        problems.append("publish is null")

    platform = install_config.get("platform")
    if isinstance(platform, dict) and "aws" in platform and not platform["aws"]:
        problems.append("platform.aws is empty")

    if "controlPlane" not in install_config:
        problems.append("missing controlPlane")
    if not any(_machine_types(install_config)):
        problems.append("missing machine type")
    if "metadata" not in install_config:
        problems.append("missing metadata")
    if "platform" not in install_config:
        problems.append("missing platform")
    if not _has_region(install_config):
        problems.append("missing platform region")

    return problems


def is_install_config_broken(install_config):
    """True when install_config has nulled or empty sections (compute, networking, controlPlane, machine types)."""
    install_config = install_config or {}
    if not install_config.get("compute"):
        return True
    if install_config.get("networking") is None:
        return True
    if "controlPlane" not in install_config:
        return True
    return not any(_machine_types(install_config))


def validate_version(version):
    """
    Check an OpenShift release version (e.g. '4.18' or '4.18.3').

    Returns:
        str | None: a problem message, or None when the version is unset or valid
    """
    if version in (None, ""):
        return None
    try:
        parsed = pkg_version.Version(str(version))
    except pkg_version.InvalidVersion:
        return f"version '{version}' is not a valid release version"

    if len(parsed.release) < 2:
        return f"version '{version}' must include at least major.minor"
    logging.debug("Version %s parsed as %s", version, parsed)
    return None


def validate_resolved_cluster(resolved):
    """Validate a ResolvedCluster: its install_config, its version and that it has a name."""
    problems = validate_install_config(resolved.install_config)
    if not resolved.name:
        problems.append("missing cluster name")
    version_problem = validate_version(resolved.version)
    if version_problem:
        problems.append(version_problem)
    return problems
