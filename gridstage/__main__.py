# gridstage/__main__.py

# Import the logging setup early so that it applies to all loggers.
from gridstage.cli.config import setup_logging
setup_logging()  # This ensures all logging settings are in place.

# Now import the main CLI entry point.
from gridstage.cli.main import main

if __name__ == "__main__":
    main()
