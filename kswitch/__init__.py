"""kswitch - interactive Kubernetes context switcher."""

__version__ = "1.0.0"
