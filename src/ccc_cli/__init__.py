from loguru import logger

# Disable logging by default for library usage.
# Application entry points (e.g., ccc_cli.cli) should call logger.enable("ccc_cli")
# to enable logging.
logger.disable("ccc_cli")
