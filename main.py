"""
Meter API Grader: Validate measurement API submissions with Docker + black-box tests

Usage:
  main.py [<repository_url>] [--config=PATH] [--verbose]
  main.py (-h | --help)

Arguments:
  <repository_url>  GitHub URL of the submission. Read from stdin if omitted.

Options:
  --config=PATH  Path to YAML configuration file [default: harness_config.yml].
  --verbose      Print executed commands and the tail of the test log.
  -h --help      Show this screen.
"""

import sys
from pathlib import Path

from docopt import docopt

from meter_grader.config import CONFIG_FILENAME
from meter_grader.config_loader import HarnessConfig, load_config
from meter_grader.errors import HarnessError
from meter_grader.pipeline import run_harness_pipeline


def read_repository_url(arguments: dict) -> str:
    url = arguments.get("<repository_url>")
    if url:
        return url.strip()
    return input("Repository URL? ").strip()


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    arguments = docopt(__doc__, argv=argv)
    config_path = Path(arguments["--config"])

    try:
        if not config_path.exists() and config_path.name == CONFIG_FILENAME:
            config = HarnessConfig()
            print(f"No configuration found at {config_path}, using defaults")
        else:
            config = load_config(config_path)
            print(f"Loaded configuration from {config_path}")
    except Exception as e:
        print(f"Error loading config: {e}")
        return 1

    if arguments["--verbose"]:
        config.verbose = True

    try:
        repository_url = read_repository_url(arguments)
        if not repository_url:
            print("Error: a repository URL is required")
            return 1

        run_harness_pipeline(repository_url, config)
        print("Process completed successfully!")
        return 0
    except KeyboardInterrupt:
        print("\nGrading interrupted by user.")
        return 1
    except (HarnessError, ValueError, OSError) as e:
        print(f"\nError: {e}")
        if config.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
