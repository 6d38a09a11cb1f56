from pathlib import Path
import logging

from conform.config import Config, load_config, DEFAULT_CONFIG_PATH
from conform.messages import detail, error, success, warning
from conform.policy import Options


def enforce(config: Config, root: Path = Path(".")) -> bool:
    """
    Runs every configured policy against `root` and prints one line per check.
    Returns True when all checks passed.
    """
    if not config.policies:
        warning(f"No policies configured in {config.path}")
        return True

    options = Options(root=root)
    valid = True

    for entry in config.policies:
        logging.debug(f"Enforcing {entry.type} policy on {root}")
        report = entry.policy.compliance(options)

        for check in report.checks:
            line = f"{entry.type} / {check.name()}: {check.message()}"
            errors = check.errors()
            if not errors:
                success(line)
                continue

            error(line)
            for issue in errors:
                detail(issue)

        valid = valid and report.valid()

    return valid


def enforce_main(config_path: Path = DEFAULT_CONFIG_PATH, root: Path = Path(".")) -> bool:
    config = load_config(config_path)
    return enforce(config, root)
