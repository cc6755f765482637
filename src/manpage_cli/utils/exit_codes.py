"""
Exit codes for manpage-cli.

Every terminal error maps to one of these so scripts wrapping ``manpage``
can tell a missing README apart from a converter or install failure.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments, or a target that is not a regular file
ERROR_INVALID_ARGS = 2

# External converter failed or returned empty output
ERROR_CONVERSION = 3

# Generated or supplied page failed validation
ERROR_VALIDATION = 4

# Target, README or page not found
ERROR_NOT_FOUND = 5

# Copying the page or creating the man directory failed
ERROR_INSTALL = 6


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_CONVERSION: "ERROR_CONVERSION",
        ERROR_VALIDATION: "ERROR_VALIDATION",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_INSTALL: "ERROR_INSTALL",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or target is not a regular file",
        ERROR_CONVERSION: "The README could not be converted to a man page",
        ERROR_VALIDATION: "The man page failed validation",
        ERROR_NOT_FOUND: "Target, README or man page not found",
        ERROR_INSTALL: "The man page could not be installed",
    }
    return descriptions.get(code, "Unknown error")
