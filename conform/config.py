from typing import Any, Callable, Dict, List
from dataclasses import dataclass, field
from pathlib import Path
import logging

import yaml

from conform.checks.license_header import License
from conform.policy import Policy

DEFAULT_CONFIG_PATH = Path(".conform.yaml")

################################################################################
# Policies
################################################################################

@dataclass
class PolicyEntry:
    type: str
    policy: Policy


@dataclass
class Config:
    path: Path
    policies: List[PolicyEntry] = field(default_factory=list)


def _string_list(policy_type: str, key: str, value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{policy_type}: '{key}' must be a list of strings, got {value!r}")
    return list(value)


def _license_policy(spec: Dict[str, Any], base_path: Path) -> License:
    known = {"skipPaths", "includeSuffixes", "excludeSuffixes", "header", "headerFile"}
    for key in spec:
        if key not in known:
            raise ValueError(f"license: unknown option '{key}'")

    if "header" in spec and "headerFile" in spec:
        raise ValueError("license: 'header' and 'headerFile' are mutually exclusive")

    header = spec.get("header")
    if "headerFile" in spec:
        header_file = spec["headerFile"]
        if not isinstance(header_file, str):
            raise ValueError(f"license: 'headerFile' must be a string, got {header_file!r}")
        header_path = base_path / header_file
        logging.debug(f"Reading license header from {header_path}")
        with open(header_path, 'rt', encoding='utf-8', newline='') as f:
            header = f.read()

    if header is None:
        header = ""
    if not isinstance(header, str):
        raise ValueError(f"license: 'header' must be a string, got {header!r}")

    return License(
        skip_paths=_string_list("license", "skipPaths", spec.get("skipPaths")),
        include_suffixes=_string_list("license", "includeSuffixes", spec.get("includeSuffixes")),
        exclude_suffixes=_string_list("license", "excludeSuffixes", spec.get("excludeSuffixes")),
        header=header,
    )


POLICY_TYPES: Dict[str, Callable[[Dict[str, Any], Path], Policy]] = {
    "license": _license_policy,
}

################################################################################
# Loading
################################################################################

def parse_config(data: Any, path: Path = DEFAULT_CONFIG_PATH) -> Config:
    """
    Builds a Config from already parsed YAML. Relative paths inside the
    configuration resolve against the directory holding `path`.
    """
    config = Config(path)
    if data is None:
        return config
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    policies = data.get("policies") or []
    if not isinstance(policies, list):
        raise ValueError(f"{path}: 'policies' must be a list")

    for i, entry in enumerate(policies):
        if not isinstance(entry, dict) or "type" not in entry:
            raise ValueError(f"{path}: policy #{i + 1} must be a mapping with a 'type'")

        policy_type = entry["type"]
        if policy_type not in POLICY_TYPES:
            raise ValueError(f"{path}: unknown policy type '{policy_type}'")

        spec = entry.get("spec") or {}
        if not isinstance(spec, dict):
            raise ValueError(f"{path}: 'spec' of policy '{policy_type}' must be a mapping")

        policy = POLICY_TYPES[policy_type](spec, path.parent)
        config.policies.append(PolicyEntry(policy_type, policy))

    return config


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> Config:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    with open(path, 'rt', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e
    return parse_config(data, path)
