"""Command-line entry point for rsetup."""

import logging
import sys

from .bootstrap import run_setup
from .config import Config, load_configuration, validate_configuration
from .platform import get_platform_info


class StructuredFormatter(logging.Formatter):
    """Formatter that appends structured context passed via ``extra``."""

    def format(self, record):
        formatted = super().format(record)

        context_parts = []
        operation = getattr(record, 'operation', None)
        if operation:
            context_parts.append(f"op={operation}")
        error_code = getattr(record, 'error_code', None)
        if error_code:
            context_parts.append(f"code={error_code}")

        if context_parts:
            formatted += f" [{' '.join(context_parts)}]"
        return formatted


def setup_logging(config: Config) -> None:
    """Configure the root logger with a single structured console handler."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.log_level))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, config.log_level))
    console_handler.setFormatter(StructuredFormatter(
        fmt='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(console_handler)

    # GitPython logs every command at DEBUG
    logging.getLogger('git').setLevel(logging.WARNING)


def main() -> None:
    """Load configuration, run the setup and exit with its status."""
    try:
        config = load_configuration()
    except ValueError as e:
        logging.basicConfig(level=logging.ERROR)
        logging.getLogger('rsetup.cli').critical(f"Failed to load configuration: {e}")
        sys.exit(1)

    setup_logging(config)
    logger = logging.getLogger('rsetup.cli')
    logger.debug(f"Host: {get_platform_info().get_system_info()}")

    validation_issues = validate_configuration(config)
    for issue in validation_issues:
        if issue.startswith("ERROR:"):
            logger.error(issue[7:])
        elif issue.startswith("WARNING:"):
            logger.warning(issue[9:])

    error_count = sum(1 for issue in validation_issues if issue.startswith("ERROR:"))
    if error_count > 0:
        logger.critical(f"Configuration validation failed with {error_count} error(s). Exiting.")
        sys.exit(1)

    try:
        exit_code = run_setup(config)
    except KeyboardInterrupt:
        logger.error("Setup interrupted by user")
        sys.exit(1)

    if exit_code == 0:
        # A child process cannot move its parent shell
        logger.info(f"Run 'cd {config.repo_dir}' to enter the repository")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
