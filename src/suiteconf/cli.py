"""CLI entry point and argument parsing."""

import argparse
import sys
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Any

import yaml

try:
    __version__ = get_version("suiteconf")
except Exception:
    __version__ = "dev"

from suiteconf.config import Configuration, ConfigurationError, get_config
from suiteconf.config.environments import load_env_configs
from suiteconf.models import RunConfig
from suiteconf.ui.output import GREEN, NC, YELLOW, error, log, success, warn
from suiteconf.utils.debug import DEBUG_LOG, debug_log


def parse_args(argv: list[str] | None = None) -> RunConfig:
    parser = argparse.ArgumentParser(
        prog="suiteconf",
        description="Resolve codeception.yml, suite and environment configuration.",
        epilog="""
Examples:
  %(prog)s                            Print the resolved global config
  %(prog)s acceptance                 Print settings of the acceptance suite
  %(prog)s acceptance -e staging      Print acceptance settings for staging
  %(prog)s --list                     List suites and environments
  %(prog)s -c path/to/project         Use codeception.yml from another directory

Resolution order (later wins):
  1. bundled defaults
  2. codeception.dist.yml, codeception.yml
  3. <suite>.suite.dist.yml, <suite>.suite.yml
  4. environment files under paths.envs
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "suite",
        nargs="?",
        help="Suite to resolve (e.g., unit, acceptance)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="PATH",
        help="Config file or directory containing codeception.yml (default: cwd)",
    )
    parser.add_argument(
        "-e",
        "--env",
        help="Environment to apply on top of the suite settings",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List discovered suites and environments",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help=f"Enable debug mode - logs resolved config to {DEBUG_LOG}",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    args = parser.parse_args(argv)
    if args.env and not args.suite:
        parser.error("--env requires a suite")
    return RunConfig(
        config_file=args.config,
        suite=args.suite,
        env=args.env,
        list_suites=args.list,
        debug=args.debug,
    )


def log_config(options: RunConfig, config: Configuration) -> None:
    """Log which files the configuration was built from."""
    log(f"Project: {config.project_dir}")
    overrides = [s for s in config.loaded_sources if s != "defaults"]
    if overrides:
        log(f"Config sources: {', '.join(overrides)}")
    if config.is_empty():
        includes = ", ".join(config.config.get("include") or []) or "none"
        warn(f"No tests path: config only aggregates includes ({includes})")
    if options.debug:
        log(f"Debug logging to {DEBUG_LOG}")


def environment_names(config: Configuration) -> list[str]:
    if config.envs_dir is None:
        return []
    return list(load_env_configs(config.envs_dir, config.params).get("env", {}))


def print_listing(config: Configuration) -> None:
    print(f"\n{GREEN}Suites:{NC}")
    for suite in config.suites:
        print(f"  {suite}")
    if not config.suites:
        print("  None")

    envs = environment_names(config)
    print(f"\n{GREEN}Environments:{NC}")
    for env in envs:
        print(f"  {env}")
    if not envs:
        print("  None")


def resolve(options: RunConfig, config: Configuration) -> dict[str, Any]:
    """Settings tree selected by the CLI options."""
    if not options.suite:
        return config.config

    if not options.env:
        return config.suite_settings(options.suite)

    environments = config.suite_environments(options.suite)
    if options.env not in environments:
        known = ", ".join(environments) or "none"
        raise ConfigurationError(f"Environment {options.env} not found (available: {known})")
    return environments[options.env]


def main(argv: list[str] | None = None) -> None:
    options = parse_args(argv)

    try:
        config = get_config(options.config_file)
        log_config(options, config)

        if options.list_suites:
            print_listing(config)
            return

        settings = resolve(options, config)
    except ConfigurationError as e:
        error(str(e))
        sys.exit(1)

    label = options.suite or "global"
    if options.env:
        label = f"{label} ({YELLOW}{options.env}{NC})"
    debug_log(options, f"resolved {options.suite or 'global'} config", settings)

    print(yaml.safe_dump(settings, sort_keys=False, default_flow_style=False), end="")
    success(f"Resolved {label} config")


if __name__ == "__main__":
    main()
