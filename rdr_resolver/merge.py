# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Deep merge of nested install_config documents.
"""

import copy
import logging


def is_empty(value):
    """None, empty mappings, empty lists and empty strings count as 'not supplied'."""
    return value is None or (isinstance(value, (dict, list, tuple, str)) and len(value) == 0)


def deep_merge(base, override, replace_paths=(), _path=()):
    """
    Recursively merge override on top of base and return a new document.

    Neither argument is modified. Rules, applied key by key:
      - a key missing from override, or set to None, keeps the base value
      - two mappings are merged recursively
      - a path listed in replace_paths is taken from override as a whole, but only when the
        override value is non-empty (so `compute: []` keeps the base machine pools)
      - lists are never merged by position or concatenated: a non-empty override list wins,
        an empty one keeps the base list
      - any other override value wins

    Args:
        base (dict): Lower precedence document
        override (dict): Higher precedence document
        replace_paths (iterable): Key paths (tuples) replaced wholesale, e.g. [("compute",)]

    Returns:
        dict: The merged document
    """
    replace_paths = {tuple(p) for p in replace_paths}
    merged = copy.deepcopy(base) if isinstance(base, dict) else {}

    for key, value in (override or {}).items():
        path = _path + (key,)
        current = merged.get(key)

        if value is None:
            continue

        if path in replace_paths:
            if is_empty(value):
                logging.debug("Override for '%s' is empty, keeping base value", ".".join(path))
                continue
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(current, dict):
            merged[key] = deep_merge(current, value, replace_paths, path)
        elif isinstance(value, list) and not value and current is not None:
            continue
        else:
            merged[key] = copy.deepcopy(value)

    return merged


def coalesce_values(original, overwrite):
    """
    Layer one Helm values document over another the way `helm -f` does.

    Mappings merge recursively; lists and scalars from overwrite replace the original;
    an explicit None in overwrite deletes the key.
    """
    result = copy.deepcopy(original) if isinstance(original, dict) else {}
    for key, value in (overwrite or {}).items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = coalesce_values(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result
