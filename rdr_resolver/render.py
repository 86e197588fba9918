# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Serialize resolved clusters for downstream provisioning.
"""

import base64
import json

import yaml

OUTPUT_FORMATS = ("yaml", "json")


def to_document(resolved):
    return resolved.to_dict()


def dump_yaml(data):
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, width=float("inf"))


def dump(documents, output_format="yaml"):
    """
    Serialize a list of documents.

    YAML output is a multi-document stream; JSON output is a single array.
    """
    if output_format == "json":
        return json.dumps(documents, indent=2) + "\n"
    if output_format == "yaml":
        return yaml.safe_dump_all(documents, default_flow_style=False, sort_keys=False,
                                  explicit_start=True, width=float("inf"))
    raise ValueError(f"Unsupported output format '{output_format}', expected one of: {', '.join(OUTPUT_FORMATS)}")


def install_config_secret(resolved, namespace=None):
    """
    Build the Secret holding install-config.yaml for a resolved cluster.

    The Secret is named <cluster>-install-config and lives in the cluster's namespace unless one is given.
    """
    payload = dump_yaml(resolved.install_config).encode("utf-8")
    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": {
            "name": f"{resolved.name}-install-config",
            "namespace": namespace or resolved.name,
        },
        "type": "Opaque",
        "data": {
            "install-config.yaml": base64.b64encode(payload).decode("ascii"),
        },
    }


def decode_install_config_secret(secret):
    """Return the install_config stored in a Secret built by install_config_secret."""
    encoded = secret["data"]["install-config.yaml"]
    return yaml.safe_load(base64.b64decode(encoded).decode("utf-8")) or {}
