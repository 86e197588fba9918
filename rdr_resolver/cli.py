#!/usr/bin/env python3
# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

"""
rdr-install-config - resolve the Regional-DR managed cluster install_configs

Usage:
  # Resolve both clusters from the chart defaults and a values file
  rdr-install-config render -f values-hub.yaml -f overrides/values-cluster-names.yaml \\
      --cluster-domain rdr.example.com

  # Emit the install-config Secrets instead of the resolved cluster documents
  rdr-install-config render -f overrides/values-cluster-names.yaml --secrets

  # Regenerate files/default-*-install-config.json from the chart values
  rdr-install-config update-defaults --dry-run

  # Render every values combination and check required fields
  rdr-install-config test-scenarios
"""

import argparse
import logging
import sys

import yaml

from .constants import CHART_VALUES_FILE, FILES_DIR, ClusterRole
from .defaults import load_fallbacks, write_default_install_configs
from .errors import ResolverError
from .render import OUTPUT_FORMATS, dump, install_config_secret, to_document
from .scenarios import run_scenarios
from .settings import ResolverSettings
from .utils import configure_logging, log_header
from .validation import validate_resolved_cluster
from .values import apply_set_values, load_values_files, load_yaml, resolve_values

DEFAULT_OVERRIDES = "overrides/values-cluster-names.yaml"
DEFAULT_VALUES_HUB = "values-hub.yaml"


def cmd_render(args):
    settings = ResolverSettings.from_env(args.cluster_domain)
    values = load_values_files(args.values, args.chart_values)

    assignments = list(args.set or [])
    if args.cluster_domain:
        assignments.append(f"global.clusterDomain={args.cluster_domain}")
    values = apply_set_values(values, assignments)

    regions = resolve_values(values, settings=settings, fallbacks=load_fallbacks(args.files_dir))
    roles = list(ClusterRole) if args.role == "all" else [ClusterRole.parse(args.role)]

    documents = []
    failures = 0
    for region in regions:
        if args.region and region.name != args.region:
            continue
        for role in roles:
            resolved = region.clusters[role]
            if args.validate:
                problems = validate_resolved_cluster(resolved)
                for problem in problems:
                    logging.error("%s/%s: %s", region.name, role.value, problem)
                failures += len(problems)
            documents.append(install_config_secret(resolved) if args.secrets else to_document(resolved))

    if args.region and not documents:
        logging.error("No regionalDR entry named '%s'", args.region)
        return 1

    sys.stdout.write(dump(documents, args.output))
    if failures:
        logging.error("%d validation problem(s) found", failures)
        return 1
    return 0


def cmd_update_defaults(args):
    values = load_yaml(args.values)
    write_default_install_configs(values, args.files_dir, dry_run=args.dry_run)
    return 0


def cmd_test_scenarios(args):
    settings = ResolverSettings.from_env(args.cluster_domain)
    domain = settings.default_cluster_domain
    log_header("RDR install_config rendering tests (domain={})", domain)

    results = run_scenarios(args.overrides, args.values_hub, domain, chart_values=args.chart_values,
                            files_dir=args.files_dir, settings=settings)

    failed = [r for r in results if not r.passed]
    if failed:
        log_header("RESULT: {} scenario(s) failed: {}", len(failed), ", ".join(r.name for r in failed))
        return 1
    log_header("RESULT: All scenarios passed")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rdr-install-config",
        description="Resolve the install_config of the Regional-DR primary and secondary clusters",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    render = subparsers.add_parser("render", help="Resolve clusters from layered values files")
    render.add_argument("-f", "--values", dest="values", action="append", default=[],
                        help="Values file layered over the chart defaults (repeatable, later wins)")
    render.add_argument("--set", dest="set", action="append",
                        help="Set a value on the command line, e.g. global.clusterDomain=rdr.example.com")
    render.add_argument("--cluster-domain", dest="cluster_domain",
                        help="Cluster domain the baseDomain derives from (overrides global.clusterDomain)")
    render.add_argument("--role", choices=["all"] + [r.value for r in ClusterRole], default="all",
                        help="Cluster role to render (default: all)")
    render.add_argument("--region", help="Only render the regionalDR entry with this name")
    render.add_argument("-o", "--output", choices=OUTPUT_FORMATS, default="yaml", help="Output format")
    render.add_argument("--secrets", action="store_true",
                        help="Emit the install-config Secrets instead of the resolved cluster documents")
    render.add_argument("--validate", action="store_true",
                        help="Check required install_config fields and exit non-zero on problems")
    render.add_argument("--chart-values", default=CHART_VALUES_FILE, help="Chart values.yaml loaded first")
    render.add_argument("--files-dir", default=FILES_DIR, help="Directory of the fallback install_config files")
    render.set_defaults(func=cmd_render)

    update = subparsers.add_parser(
        "update-defaults", help="Regenerate the fallback install_config files from the chart values")
    update.add_argument("--values", default=CHART_VALUES_FILE, help="Chart values.yaml to read install_config from")
    update.add_argument("--files-dir", default=FILES_DIR, help="Directory to write default-<role>-install-config.json to")
    update.add_argument("--dry-run", action="store_true", help="Print what would be written, do not overwrite files")
    update.set_defaults(func=cmd_update_defaults)

    scenarios = subparsers.add_parser("test-scenarios", help="Render install_configs under several values combinations")
    scenarios.add_argument("--overrides", default=DEFAULT_OVERRIDES, help="Cluster-name overrides values file")
    scenarios.add_argument("--values-hub", default=DEFAULT_VALUES_HUB, help="values-hub.yaml")
    scenarios.add_argument("--cluster-domain", dest="cluster_domain", help="global.clusterDomain to render with")
    scenarios.add_argument("--chart-values", default=CHART_VALUES_FILE, help="Chart values.yaml")
    scenarios.add_argument("--files-dir", default=FILES_DIR, help="Directory of the fallback install_config files")
    scenarios.set_defaults(func=cmd_test_scenarios)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return args.func(args)
    except (ResolverError, ValueError) as err:
        logging.critical("%s", err)
    except (OSError, yaml.YAMLError) as err:
        logging.error("Error reading input: %s", err, exc_info=args.verbose)
    return 1


if __name__ == "__main__":
    sys.exit(main())
