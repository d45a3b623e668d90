# -------------------------------------
# promptexpand CLI entry point
# -------------------------------------
"""
CLI entry point.

Usage:
    python -m promptexpand "A [red, blue] car"
    python -m promptexpand "_hero_ in _place_" --catalog wildcards.yml --cost 4/100
    python -m promptexpand "sketch | ink | color" --execution
"""
import argparse
import logging
import sys

import yaml

from .catalog import load_catalog
from .config import DEFAULT_CONFIG, load_config
from .engine import expand_with_cost
from .errors import CatalogError, ConfigError, PromptSyntaxError
from .kinds import classify
from .pipeline import describe, get_execution_prompts


def _main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Expand bracket, wildcard and pipeline prompts.")
    p.add_argument("prompt", help="Prompt text")
    p.add_argument("--catalog", "-c", metavar="PATH", help="Wildcard catalog: YAML file or directory of .txt files")
    p.add_argument("--config", metavar="PATH", help="YAML config with expansion limits")
    p.add_argument("--cost", metavar="EXPR", help="Cost per generated unit (e.g. 4, 0.04, 4/100)")
    p.add_argument("--validate", action="store_true", help="Only run the syntax checks")
    p.add_argument("--execution", action="store_true", help="Print the prompts to execute, in order")
    p.add_argument("--yaml", action="store_true", help="Dump the full result as YAML")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        catalog = load_catalog(args.catalog) if args.catalog else ()
    except (OSError, yaml.YAMLError, ConfigError, CatalogError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.validate:
        # syntax only: no catalog lookups, no expansion
        try:
            classify(args.prompt, config)
        except PromptSyntaxError as e:
            print(f"invalid: {e.diagnostic.message}")
            if e.diagnostic.suggestion:
                print(f"  hint: {e.diagnostic.suggestion}")
            return 1
        print("valid")
        return 0

    try:
        result, est = expand_with_cost(args.prompt, catalog, config, args.cost)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.yaml:
        out = {"result": result.to_dict()}
        if est is not None:
            out["cost"] = est.to_dict()
        print(yaml.safe_dump(out, sort_keys=False, allow_unicode=True), end="")
        return 0 if result.is_valid else 1

    lines = get_execution_prompts(result) if args.execution else result.units
    for line in lines:
        print(line)

    if result.is_pipeline:
        print(describe(result), file=sys.stderr)
    for w in result.warnings:
        print(f"warning: {w}", file=sys.stderr)
    for e in result.errors:
        print(f"error: {e}", file=sys.stderr)
    if est is not None:
        print(f"cost: {est.total_cost:g} ({est.unit_count} x {est.per_unit:g})", file=sys.stderr)
    return 0 if result.is_valid else 1


if __name__ == "__main__":
    raise SystemExit(_main())
