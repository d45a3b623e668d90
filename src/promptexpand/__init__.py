# -------------------------------------
# promptexpand
# -------------------------------------
"""
Prompt expansion and pipeline templating.

One authored prompt encodes many concrete prompts:
- [a, b, c]           one bracket group, one prompt per option
- _name_              wildcard lists from a catalog, crossed when several
- step | step | step  pipelines, one generation per step

Modules:
- syntax        live-typing checks for brackets and pipelines
- wildcards     _name_ references and resolution
- brackets      bracket group expansion
- combinations  wildcard cartesian products and threshold warnings
- pipeline      | pipelines and execution prompts
- cost          cost estimates
- engine        expand(), the entry point
- config        limits, loaded from YAML
- catalog       catalog snapshots from mappings, YAML or .txt directories
- store         in-memory wildcard store

Imports are lazy. Use: from promptexpand import expand, estimate, etc.
"""
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "expand",
    "expand_with_cost",
    "classify",
    "validate_brackets",
    "validate_pipeline",
    "extract_names",
    "resolve",
    "expand_brackets",
    "combine",
    "parse_pipeline",
    "get_execution_prompts",
    "estimate",
    "ExpansionConfig",
    "load_config",
    "load_catalog",
    "as_catalog",
    "WildcardDefinition",
    "ExpansionResult",
    "CostEstimate",
    "Diagnostic",
    "ErrorKind",
]

_LAZY_IMPORTS = {
    "expand": (".engine", "expand"),
    "expand_with_cost": (".engine", "expand_with_cost"),
    "classify": (".kinds", "classify"),
    "validate_brackets": (".syntax", "validate_brackets"),
    "validate_pipeline": (".syntax", "validate_pipeline"),
    "extract_names": (".wildcards", "extract_names"),
    "resolve": (".wildcards", "resolve"),
    "expand_brackets": (".brackets", "expand_brackets"),
    "combine": (".combinations", "combine"),
    "parse_pipeline": (".pipeline", "parse_pipeline"),
    "get_execution_prompts": (".pipeline", "get_execution_prompts"),
    "estimate": (".cost", "estimate"),
    "ExpansionConfig": (".config", "ExpansionConfig"),
    "load_config": (".config", "load_config"),
    "load_catalog": (".catalog", "load_catalog"),
    "as_catalog": (".catalog", "as_catalog"),
    "WildcardDefinition": (".wildcards", "WildcardDefinition"),
    "ExpansionResult": (".results", "ExpansionResult"),
    "CostEstimate": (".cost", "CostEstimate"),
    "Diagnostic": (".errors", "Diagnostic"),
    "ErrorKind": (".errors", "ErrorKind"),
}


def __getattr__(name: str):
    if name in _LAZY_IMPORTS:
        module_name, attr_name = _LAZY_IMPORTS[name]
        from importlib import import_module
        module = import_module(module_name, __package__)
        return getattr(module, attr_name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
