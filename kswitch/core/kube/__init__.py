"""Kubernetes context collaborators."""

from kswitch.core.kube.kubectl import KubectlClient
from kswitch.core.kube.resolve import resolve_context, short_name

__all__ = ["KubectlClient", "resolve_context", "short_name"]
