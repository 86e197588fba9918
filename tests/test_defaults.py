#!/usr/bin/env python3
"""
Unit tests for the packaged fallback install_configs.
"""

import json
import os
import tempfile
import unittest

from rdr_resolver.constants import CHART_VALUES_FILE, DEFAULT_BASE_DOMAIN, ClusterRole
from rdr_resolver.defaults import (
    build_default_install_configs,
    fallback_path,
    load_fallback,
    load_fallbacks,
    normalize_install_config,
    write_default_install_configs,
)
from rdr_resolver.errors import DefaultsError
from rdr_resolver.sanitize import sanitize
from rdr_resolver.values import load_yaml


class TestPackagedFallbacks(unittest.TestCase):
    """The packaged fallback files must stay in sync with the chart values."""

    def test_both_roles_packaged(self):
        """Test that both packaged fallback files load."""
        fallbacks = load_fallbacks()
        self.assertEqual(set(fallbacks), set(ClusterRole))

    def test_fallbacks_match_chart_values(self):
        """Test that the packaged fallbacks match the chart values."""
        expected = build_default_install_configs(load_yaml(CHART_VALUES_FILE))
        for role in ClusterRole:
            with self.subTest(role=role.value):
                self.assertEqual(load_fallback(role), expected[role])

    def test_fallbacks_are_sanitized(self):
        """Test that the packaged fallbacks are already sanitized."""
        for role, fallback in load_fallbacks().items():
            with self.subTest(role=role.value):
                self.assertEqual(sanitize(fallback), fallback)
                self.assertIn("controlPlane", fallback)


class TestBuildDefaults(unittest.TestCase):
    """Test cases for building fallback files from chart values."""

    def test_templated_base_domain_replaced(self):
        """Test replacing a templated baseDomain with the static placeholder."""
        ic = normalize_install_config({"baseDomain": '{{ .Values.global.clusterDomain }}'})
        self.assertEqual(ic["baseDomain"], DEFAULT_BASE_DOMAIN)

    def test_static_base_domain_kept(self):
        """Test keeping a literal baseDomain."""
        ic = normalize_install_config({"baseDomain": "corp.example.org"})
        self.assertEqual(ic["baseDomain"], "corp.example.org")

    def test_missing_install_config(self):
        """Test building fallbacks from a cluster without install_config."""
        values = {"regionalDR": [{"name": "resilient", "clusters": {"primary": {"name": "ocp-primary"}}}]}
        with self.assertRaises(DefaultsError):
            build_default_install_configs(values)

    def test_missing_regional_dr(self):
        """Test building fallbacks from values without regionalDR."""
        with self.assertRaises(DefaultsError):
            build_default_install_configs({})


class TestWriteDefaults(unittest.TestCase):
    """Test cases for writing the fallback files."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.values = load_yaml(CHART_VALUES_FILE)

    def test_write(self):
        """Test writing the fallback JSON files."""
        written = write_default_install_configs(self.values, self.tmpdir.name)

        self.assertEqual(written, [fallback_path(r, self.tmpdir.name) for r in ClusterRole])
        with open(written[0]) as f:
            content = f.read()
        self.assertTrue(content.endswith("}\n"))
        self.assertEqual(json.loads(content)["metadata"]["name"], "ocp-primary")
        self.assertEqual(list(json.loads(content))[0], "apiVersion")

    def test_dry_run_writes_nothing(self):
        """Test that a dry run leaves the files untouched."""
        write_default_install_configs(self.values, self.tmpdir.name, dry_run=True)
        self.assertEqual(os.listdir(self.tmpdir.name), [])

    def test_load_missing_fallback(self):
        """Test loading fallbacks from an empty directory."""
        self.assertIsNone(load_fallback("primary", self.tmpdir.name))
        self.assertEqual(load_fallbacks(self.tmpdir.name), {})


if __name__ == '__main__':
    unittest.main(verbosity=2)
