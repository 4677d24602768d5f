"""Programmatic entry point."""

from __future__ import annotations

import logging

import yaml
from rich.markup import escape

from recently.config import load_config, validate_config
from recently.errors import ConfigNotFoundError, RunAllError
from recently.messages import CONFIG_NOT_FOUND
from recently.options import RunOptions
from recently.orchestrator.run_all import run_all
from recently.ui import ConsoleLogger, Logger, print_task_output
from recently.validator import validate_concurrent, validate_shell

logger = logging.getLogger(__name__)


async def lint_recently(options: RunOptions | None = None, log: Logger | None = None) -> bool:
    """Run configured commands against recently changed files.

    Args:
        options: Run options; `options.config` takes precedence over
            `options.config_path` and config file discovery.
        log: Sink for status lines and collected task output.

    Returns:
        True when every task passed or there was nothing to run, False when
        the run failed.

    Raises:
        InvalidOptionsError: If `shell` or `concurrent` is invalid.
        ConfigNotFoundError: If no configuration could be found.
        ConfigError: If the configuration is malformed.
    """
    options = options or RunOptions()
    log = log or ConsoleLogger()
    cwd = options.resolved_cwd()

    validate_shell(options.shell, log)
    validate_concurrent(options.concurrent, log)

    if options.config is not None:
        raw_config, filepath = options.config, "(input)"
    else:
        logger.debug("Loading config from %s", options.config_path or f"search from {cwd}")
        loaded = load_config(options.config_path, cwd=cwd)
        if loaded is None:
            log.error(CONFIG_NOT_FOUND)
            raise ConfigNotFoundError()
        raw_config, filepath = loaded.config, loaded.filepath
    logger.debug("Successfully loaded config from `%s`: %s", filepath, raw_config)

    config = validate_config(raw_config, log)
    if options.debug:
        log.log("Running recently with the following config:")
        dumped = yaml.safe_dump({"days": config.days, "patterns": config.patterns}, sort_keys=False)
        log.log(escape(dumped.rstrip()))

    try:
        ctx = await run_all(options, config)
    except RunAllError as exc:
        print_task_output(exc.ctx, log)
        return False

    logger.debug("Tasks were executed successfully!")
    print_task_output(ctx, log)
    return True
