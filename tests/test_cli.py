#!/usr/bin/env python3
"""
Unit tests for the rdr-install-config command line.
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

import yaml

from rdr_resolver import cli
from rdr_resolver.constants import CLUSTER_DOMAIN_ENV
from rdr_resolver.render import decode_install_config_secret

OVERRIDES = {
    "clusterOverrides": {
        "primary": {"name": "ocp-p", "install_config": {"platform": {"aws": {"region": "eu-west-1"}}}},
    }
}


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        patcher = mock.patch.object(cli, "configure_logging")
        patcher.start()
        self.addCleanup(patcher.stop)

    def write_yaml(self, name, data):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'w') as f:
            yaml.safe_dump(data, f)
        return path

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(list(argv))
        return code, out.getvalue()


class TestRenderCommand(CliTestCase):
    """Test cases for the render subcommand."""

    def test_render_yaml(self):
        """Test rendering both clusters as a YAML stream."""
        code, output = self.run_cli("render", "--cluster-domain", "rdr.example.com")
        documents = list(yaml.safe_load_all(output))

        self.assertEqual(code, 0)
        self.assertEqual([d["name"] for d in documents], ["ocp-primary", "ocp-secondary"])
        self.assertEqual(documents[0]["install_config"]["baseDomain"], "example.com")

    def test_render_with_overrides_json(self):
        """Test rendering one role with an overrides file as JSON."""
        overrides = self.write_yaml("overrides.yaml", OVERRIDES)

        code, output = self.run_cli("render", "-f", overrides, "--role", "primary", "-o", "json")
        documents = json.loads(output)

        self.assertEqual(code, 0)
        self.assertEqual(len(documents), 1)
        self.assertEqual(documents[0]["name"], "ocp-p")
        self.assertEqual(documents[0]["install_config"]["platform"]["aws"]["region"], "eu-west-1")

    def test_render_secrets(self):
        """Test rendering install-config Secrets with a --set cluster domain."""
        code, output = self.run_cli("render", "--secrets", "--set", "global.clusterDomain=rdr.apps.example.com")
        secrets = list(yaml.safe_load_all(output))

        self.assertEqual(code, 0)
        self.assertEqual(secrets[1]["metadata"]["name"], "ocp-secondary-install-config")
        self.assertEqual(decode_install_config_secret(secrets[1])["baseDomain"], "apps.example.com")

    def test_cluster_domain_from_environment(self):
        """Test taking the cluster domain from the environment."""
        with mock.patch.dict(os.environ, {CLUSTER_DOMAIN_ENV: "rdr.lab.example.net"}):
            code, output = self.run_cli("render", "--role", "secondary")

        self.assertEqual(code, 0)
        self.assertEqual(yaml.safe_load(output)["install_config"]["baseDomain"], "lab.example.net")

    def test_render_validate_fails_without_fallbacks(self):
        """Test that --validate exits 1 when no fallback files exist."""
        minimal = self.write_yaml("minimal.yaml", {
            "regionalDR": [{"name": "resilient", "clusters": {"primary": {"name": "ocp-primary"}}}]
        })
        empty_dir = os.path.join(self.tmpdir.name, "files")
        os.makedirs(empty_dir)

        code, _ = self.run_cli("render", "-f", minimal, "--files-dir", empty_dir, "--validate")

        self.assertEqual(code, 1)

    def test_unknown_region(self):
        """Test that an unknown --region exits 1."""
        code, _ = self.run_cli("render", "--region", "nowhere")
        self.assertEqual(code, 1)

    def test_missing_values_file(self):
        """Test that a missing values file exits 1."""
        code, _ = self.run_cli("render", "-f", os.path.join(self.tmpdir.name, "missing.yaml"))
        self.assertEqual(code, 1)

    def test_bad_set_assignment(self):
        """Test that a --set without '=' exits 1."""
        code, _ = self.run_cli("render", "--set", "global.clusterDomain")
        self.assertEqual(code, 1)

    def test_set_replaces_scalar_parent(self):
        """Test a --set path through a key set to a scalar earlier."""
        code, output = self.run_cli("render", "--role", "primary",
                                    "--set", "global=1", "--set", "global.clusterDomain=rdr.lab.example.net")

        self.assertEqual(code, 0)
        self.assertEqual(yaml.safe_load(output)["install_config"]["baseDomain"], "lab.example.net")

    def test_non_string_cluster_domain(self):
        """Test that a numeric global.clusterDomain exits 1 without output."""
        code, output = self.run_cli("render", "--set", "global.clusterDomain=10")

        self.assertEqual(code, 1)
        self.assertEqual(output, "")


class TestUpdateDefaultsCommand(CliTestCase):
    """Test cases for the update-defaults subcommand."""

    def test_writes_files(self):
        """Test writing both fallback files."""
        code, _ = self.run_cli("update-defaults", "--files-dir", self.tmpdir.name)

        self.assertEqual(code, 0)
        self.assertEqual(sorted(os.listdir(self.tmpdir.name)), [
            "default-primary-install-config.json", "default-secondary-install-config.json",
        ])

    def test_values_without_install_config(self):
        """Test that values without install_config exit 1 and write nothing."""
        values = self.write_yaml("values.yaml", {"regionalDR": []})

        code, _ = self.run_cli("update-defaults", "--values", values, "--files-dir", self.tmpdir.name)

        self.assertEqual(code, 1)
        self.assertEqual(os.listdir(self.tmpdir.name), ["values.yaml"])


class TestScenariosCommand(CliTestCase):
    """Test cases for the test-scenarios subcommand."""

    def test_passes(self):
        """Test that every scenario passes with valid inputs."""
        overrides = self.write_yaml("overrides.yaml", OVERRIDES)
        values_hub = self.write_yaml("values-hub.yaml", {"global": {"clusterDomain": "rdr.example.com"}})

        code, _ = self.run_cli("test-scenarios", "--overrides", overrides, "--values-hub", values_hub,
                               "--cluster-domain", "rdr.example.com")

        self.assertEqual(code, 0)

    def test_missing_files_fail(self):
        """Test that missing overrides and hub files exit 1."""
        code, _ = self.run_cli("test-scenarios", "--overrides", os.path.join(self.tmpdir.name, "missing.yaml"),
                               "--values-hub", os.path.join(self.tmpdir.name, "missing-hub.yaml"))
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
