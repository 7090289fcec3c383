"""Root Click group for the token versioning CLI."""

from __future__ import annotations

from typing import Optional

import click

from ..config.manager import ConfigManager
from ..logging import get_logger, setup_logging
from .commands import register_all


@click.group()
@click.option(
    "--config", "-c", type=click.Path(exists=False), help="Configuration file path"
)
@click.option(
    "--log-level",
    default=None,
    help="Log level (defaults to configuration)",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
)
@click.pass_context
def main(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """Design token versioning: diffs, version bumps and migrations."""
    ctx.ensure_object(dict)

    try:
        config_manager = ConfigManager(config_path=config)
    except ValueError as e:
        raise click.ClickException(str(e))
    ctx.obj["config"] = config_manager

    log_level = log_level or config_manager.logging.level
    setup_logging(
        log_level=log_level,
        log_format=config_manager.logging.format,
        log_file=config_manager.logging.file,
        redact_token_values=config_manager.logging.redact_token_values,
    )

    logger = get_logger(__name__)
    logger.debug(
        "CLI initialized",
        config_path=str(config_manager.config_path),
        log_level=log_level,
    )


register_all(main)


if __name__ == "__main__":  # pragma: no cover
    main()  # pylint: disable=no-value-for-parameter
