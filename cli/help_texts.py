"""
Centralized Help Text Constants

CLI help text constants and exit codes shared by the subcommands.
"""

# Exit codes for different error types
class ExitCodes:
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_CONFIGURATION = 3
    AUTHENTICATION_ERROR = 5
    PERMISSION_ERROR = 7
    NETWORK_ERROR = 8
    VALIDATION_FAILED = 9
    POLL_TIMEOUT = 11
    CANCELLED = 130

# Command help texts
RUN_HELP = "Validate the configured environment and export its issues to CSV and JSON."
INFO_HELP = "Show the project and environment the configured API key points at."

# Option help texts
CONFIG_HELP = (
    "Path to the YAML configuration file. "
    "Defaults to $VALIDATION_EXPORT_CONFIG or .kontent-validation/config.yaml."
)

OUTPUT_HELP = (
    "Base filename for the exports; '.csv' and '.json' are appended. "
    "Overrides export_filename from configuration."
)

OUTPUT_DIR_HELP = "Directory for the export files (overrides config)."

MAX_ATTEMPTS_HELP = (
    "Give up after this many validation status checks. "
    "Unbounded unless set here or in configuration."
)

TIMEOUT_HELP = (
    "Give up if the validation task has not finished after this many seconds. "
    "Unbounded unless set here or in configuration."
)

LOG_LEVEL_HELP = "Logging level (overrides config)."

LOG_FILE_HELP = "Also write logs to this file (rotated at 10MB)."
