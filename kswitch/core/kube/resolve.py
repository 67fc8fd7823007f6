"""Resolution of user-typed names to full context names."""

from __future__ import annotations

from typing import Sequence

from kswitch.core.exceptions import AmbiguousContextError, ContextNotFoundError


def short_name(context: str) -> str:
    """The part of a context name after its last ``/``.

    EKS contexts are ARNs such as
    ``arn:aws:eks:us-east-1:123456789012:cluster/payments-dev``; their short
    name is the cluster name.
    """
    return context.rsplit("/", 1)[-1]


def resolve_context(name: str, contexts: Sequence[str]) -> str:
    """Resolve ``name`` against ``contexts``.

    Tried in order: exact name, short name, then a unique substring match.

    Raises:
        ContextNotFoundError: Nothing matches
        AmbiguousContextError: More than one context contains ``name``
    """
    name = name.strip().strip("\"'")
    if name in contexts:
        return name

    for context in contexts:
        if short_name(context) == name:
            return context

    matches = [context for context in contexts if name and name in context]
    if len(matches) == 1:
        return matches[0]
    if matches:
        raise AmbiguousContextError(name, matches)
    raise ContextNotFoundError(name)
