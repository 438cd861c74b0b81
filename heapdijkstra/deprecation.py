"""One-time deprecation warnings for legacy public names."""

from __future__ import annotations

import functools
import warnings
from typing import Any, Callable, Optional, Set, Tuple, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

_warned: Set[Tuple[str, Optional[str], str]] = set()


def warn_once(message: str, *, remove_in: str, since: Optional[str] = None) -> None:
    """Issue a :class:`DeprecationWarning` with ``message`` once per process.

    Parameters
    ----------
    message:
        Text describing the deprecated name and its replacement.
    remove_in:
        Version in which the deprecated name will be removed.
    since:
        Release that introduced the deprecation. Omit it for names that were
        never part of a release of this package.
    """
    key = (message, since, remove_in)
    if key in _warned:
        return
    _warned.add(key)
    when = f"deprecated since {since}; " if since else ""
    warnings.warn(
        f"{message} ({when}will be removed in {remove_in})",
        DeprecationWarning,
        stacklevel=3,
    )


def deprecated_alias(
    func: F, old_name: str, *, remove_in: str, since: Optional[str] = None
) -> F:
    """Return a wrapper of ``func`` that warns once when called as ``old_name``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        warn_once(
            f"{old_name}() is deprecated, use {func.__name__}()",
            remove_in=remove_in,
            since=since,
        )
        return func(*args, **kwargs)

    wrapper.__name__ = old_name
    wrapper.__qualname__ = old_name
    return wrapper  # type: ignore[return-value]


__all__ = ["deprecated_alias", "warn_once"]
