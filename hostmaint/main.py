"""Main entry point for the hostmaint console."""
import argparse
import logging
import sys

from rich.console import Console

from .config.config_manager import DEFAULT_CONFIG_PATH, ConfigManager
from .ui.shell import Shell


def main(argv=None):
    """Main entry point for the application."""
    parser = argparse.ArgumentParser(
        description="Linux System Monitoring & Maintenance Tool"
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)

    # Diagnostics go to stderr so they never mix with the menu.
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load configuration - let it crash if bad
    config = ConfigManager.load_config(args.config)
    if args.no_color:
        config.display.show_colors = False

    console = Console(no_color=not config.display.show_colors)
    return Shell(config, console=console).run()


if __name__ == "__main__":
    sys.exit(main())
