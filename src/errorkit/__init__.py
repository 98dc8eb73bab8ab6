"""errorkit: safe execution wrappers for error-returning Python code.

Run a computation, and if it raises instead of returning, get the exception
back as an ordinary error value together with default-valued results.

Flat imports (preferred):
    from errorkit import validate, safe_exec, safe_exec1, recover

Submodule imports (for organization):
    from errorkit.safe import safe_exec_n, safe_exec_with_handler_n
    from errorkit.errors import PanicError, ValidationError
"""

# Configuration
from errorkit._config import ErrorkitConfig, get_config, init

# Logging
from errorkit._logging import configure_logging, get_logger, reset_logging

# Decorators
from errorkit.decorators import recover, recover_results

# Error types
from errorkit.errors import Invalid, Panic, PanicError, ValidationError

# Safe execution
from errorkit.safe import (
    safe_exec,
    safe_exec0,
    safe_exec1,
    safe_exec2,
    safe_exec3,
    safe_exec_n,
    safe_exec_with_handler,
    safe_exec_with_handler0,
    safe_exec_with_handler1,
    safe_exec_with_handler2,
    safe_exec_with_handler3,
    safe_exec_with_handler_n,
)

# Validation
from errorkit.validate import validate

__all__ = [
    # Configuration
    'ErrorkitConfig',
    # Error types
    'Invalid',
    'Panic',
    'PanicError',
    'ValidationError',
    'configure_logging',
    'get_config',
    'get_logger',
    'init',
    # Decorators
    'recover',
    'recover_results',
    'reset_logging',
    # Safe execution
    'safe_exec',
    'safe_exec0',
    'safe_exec1',
    'safe_exec2',
    'safe_exec3',
    'safe_exec_n',
    'safe_exec_with_handler',
    'safe_exec_with_handler0',
    'safe_exec_with_handler1',
    'safe_exec_with_handler2',
    'safe_exec_with_handler3',
    'safe_exec_with_handler_n',
    # Validation
    'validate',
]
