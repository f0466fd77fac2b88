"""polyresult: Success/Failure outcomes that work the same sync or async.

One set of combinators handles both immediate outcomes and awaitables of
outcomes. Immediate in, immediate out; anything pending in, a Deferred out.

Flat imports (preferred):
    from polyresult import success, failure, map, flat_map, all_, try_catch, pipe

Submodule imports (for organization):
    from polyresult.outcome import Success, Failure, Outcome
    from polyresult.combinators import map, flat_map, match
    from polyresult.capture import try_catch, wrap
"""

# Configuration
from polyresult._config import Config, get_config, init

# Logging
from polyresult._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)

# Aggregation
from polyresult.aggregate import all_

# Capture
from polyresult.capture import from_awaitable, try_catch, wrap

# Combinators
from polyresult.combinators import (
    catch_error,
    flat_map,
    flat_map_error,
    map,  # noqa: A004
    map_error,
    match,
    tap,
    tap_both,
    tap_error,
)

# Composition
from polyresult.compose import pipe
from polyresult.dual import Dual, dual
from polyresult.errors import (
    NoAdapterError,
    NotAnOutcomeError,
    NotOutcomeLikeError,
    PolyresultError,
)

# Interop
from polyresult.interop import from_, register_adapter, to_outcome
from polyresult.outcome import (
    Failure,
    Outcome,
    Success,
    failure,
    is_failure,
    is_outcome,
    is_outcome_like,
    is_success,
    success,
)
from polyresult.pending import Deferred, MaybeDeferred, Pending, is_pending

__all__ = [
    # Configuration
    'Config',
    # Pending values
    'Deferred',
    'Dual',
    # Outcome types
    'Failure',
    'MaybeDeferred',
    # Errors
    'NoAdapterError',
    'NotAnOutcomeError',
    'NotOutcomeLikeError',
    'Outcome',
    'Pending',
    'PolyresultError',
    'Success',
    # Logging
    'add_log_hook',
    # Aggregation
    'all_',
    # Combinators
    'catch_error',
    'clear_log_hooks',
    'configure_logging',
    'dual',
    'failure',
    'flat_map',
    'flat_map_error',
    # Interop
    'from_',
    # Capture
    'from_awaitable',
    'get_config',
    'get_logger',
    'init',
    'is_failure',
    'is_outcome',
    'is_outcome_like',
    'is_pending',
    'is_success',
    'map',
    'map_error',
    'match',
    # Composition
    'pipe',
    'register_adapter',
    'remove_log_hook',
    'success',
    'tap',
    'tap_both',
    'tap_error',
    'to_outcome',
    'try_catch',
    'wrap',
]

__version__ = '0.1.0'
