"""Utility function for modifying function signatures.

This module provides a decorator `hide_args` that allows hiding specific
keyword arguments from a function's signature and automatically injecting
them when the function is called. Tool schemas are generated from signatures,
so server-side settings must not show up there.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

TReturn = TypeVar("TReturn")


def _strip_hidden_from_doc(doc: str, hidden_names: set[str]) -> str:
    if not doc:
        return doc
    filtered_lines = []
    for line in doc.splitlines():
        # Strip line for matching but preserve leading whitespace
        lstrip = line.lstrip()
        if any(
            lstrip.startswith((f"{param}:", f"{param} (", f":param {param}:"))
            for param in hidden_names
        ):
            continue  # skip this line
        filtered_lines.append(line)
    return "\n".join(filtered_lines)


def hide_args(
    fn: Callable[..., TReturn],
    **injected_kwargs: Any,
) -> Callable[..., TReturn]:
    """Get a wrapper that hides provided kwargs from the function signature.

    Removes the hidden Args from the docstring too. Coroutine functions are
    wrapped in a coroutine function so callers can still detect and await them.

    Args:
        fn: The original function to wrap.
        injected_kwargs: Parameter names and values to hide and auto-inject.

    Returns:
        A callable with a modified signature and injected arguments.

    """
    sig = inspect.signature(fn)

    # Identify which injected parameters actually exist in the function signature
    hidden_params = {
        name: value for name, value in injected_kwargs.items() if name in sig.parameters
    }

    if not hidden_params:
        return fn  # No matching parameters to hide

    new_params = [
        param for name, param in sig.parameters.items() if name not in hidden_params
    ]
    new_sig = sig.replace(parameters=new_params)
    new_doc = _strip_hidden_from_doc(inspect.getdoc(fn) or "", set(hidden_params))

    def _all_args(*args: Any, **kwargs: Any) -> dict[str, Any]:
        bound_args = new_sig.bind(*args, **kwargs)
        bound_args.apply_defaults()
        all_args = dict(bound_args.arguments)
        all_args.update(hidden_params)
        return all_args

    if inspect.iscoroutinefunction(fn):

        @wraps(fn)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            return await fn(**_all_args(*args, **kwargs))

        wrapper: Callable[..., Any] = async_wrapper
    else:

        @wraps(fn)
        def sync_wrapper(*args: Any, **kwargs: Any) -> TReturn:
            return fn(**_all_args(*args, **kwargs))

        wrapper = sync_wrapper

    # Reflect modified signature
    wrapper.__signature__ = new_sig  # type: ignore[attr-defined]
    wrapper.__name__ = fn.__name__
    wrapper.__doc__ = new_doc

    return wrapper
