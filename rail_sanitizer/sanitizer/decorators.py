"""
Sanitization decorators for request handlers and service functions.
"""

from functools import wraps
from typing import Callable, Optional

from .sanitizer import Sanitizer


def sanitize_arguments(
    sanitizer: Optional[Sanitizer] = None,
    validator_func: Optional[Callable] = None,
) -> Callable:
    """Decorator that sanitizes payload arguments before the call.

    Keyword arguments named 'input', 'data', or ending with '_data' are
    replaced with their sanitized graph, so immutable payloads are swapped
    for their rebuilt instance.

    Args:
        sanitizer: Sanitizer to use; the shared default when omitted.
        validator_func: Optional function run after sanitization with the same
            (*args, **kwargs) as the decorated function. It can raise to
            block execution.

    Returns:
        A decorator function.

    Example:
        @sanitize_arguments()
        def create_item(request, data):
            # data is already sanitized here
            return Item.objects.create(**data)

    Raises:
        ValidationError: Propagated from the sanitizer when a payload is rejected.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            if sanitizer is not None:
                active = sanitizer
            else:
                from . import get_default_sanitizer

                active = get_default_sanitizer()

            input_keys = [
                key
                for key in kwargs
                if key == "input" or key == "data" or key.endswith("_data")
            ]
            for key in input_keys:
                kwargs[key] = active.sanitize_graph(kwargs[key])

            if validator_func:
                validator_func(*args, **kwargs)

            return func(*args, **kwargs)

        return wrapper

    return decorator
