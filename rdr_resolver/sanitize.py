# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Restrict a merged install_config to what the installer accepts.
"""

import copy
import logging

from .constants import (
    ALLOWED_INSTALL_CONFIG_KEYS,
    DEFAULT_API_VERSION,
    DISALLOWED_PLATFORM_KEYS,
)
from .errors import MalformedDocument


def strip_platform_keys(platform, disallowed=DISALLOWED_PLATFORM_KEYS):
    """
    Remove the disallowed keys from every provider sub-document of platform.

    Other provider keys pass through untouched, including ones this module knows nothing about.
    """
    if not isinstance(platform, dict):
        return platform

    cleaned = {}
    for provider, settings in platform.items():
        if isinstance(settings, dict):
            dropped = [k for k in settings if k in disallowed]
            if dropped:
                logging.debug("Removing platform.%s keys rejected by the installer: %s", provider, dropped)
            settings = {k: v for k, v in settings.items() if k not in disallowed}
        cleaned[provider] = settings
    return cleaned


def sanitize(install_config):
    """
    Return a copy of install_config containing only installer-valid fields.

    - apiVersion is added when missing or null; any other value, even an empty string, is kept
    - platform.<provider>.vpc is removed
    - top-level keys outside ALLOWED_INSTALL_CONFIG_KEYS are dropped

    sanitize(sanitize(x)) == sanitize(x).

    Raises:
        MalformedDocument: if install_config is not a mapping
    """
    if install_config is None:
        install_config = {}
    if not isinstance(install_config, dict):
        raise MalformedDocument("install_config", install_config)

    doc = copy.deepcopy(install_config)
    if doc.get("apiVersion") is None:
        doc["apiVersion"] = DEFAULT_API_VERSION

    if "platform" in doc:
        doc["platform"] = strip_platform_keys(doc["platform"])

    unknown = [k for k in doc if k not in ALLOWED_INSTALL_CONFIG_KEYS]
    if unknown:
        logging.debug("Dropping install_config keys not accepted by the installer: %s", unknown)

    return {k: doc[k] for k in ALLOWED_INSTALL_CONFIG_KEYS if k in doc}
