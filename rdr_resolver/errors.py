# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
Exceptions raised by the install_config resolver.
"""


class ResolverError(Exception):
    """Base class for every error raised by rdr_resolver."""


class ContractViolation(ResolverError):
    """Raised when a caller passes an argument outside the resolver's contract (e.g. an unknown role)."""


class MalformedDocument(ResolverError):
    """Raised when an input layer cannot be read as a key-value document."""

    def __init__(self, layer, value):
        self.layer = layer
        self.value = value
        super().__init__(f"{layer} must be a mapping, got {type(value).__name__}")


class DefaultsError(ResolverError):
    """Raised when the fallback install_config files cannot be built from chart values."""
