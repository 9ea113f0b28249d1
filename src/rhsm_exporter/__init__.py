"""
rhsm-exporter: Prometheus exporter for Red Hat subscription data.

Subpackages
-----------
- data:     subscription models, serialization and fetchers
- metrics:  gauge projection of fetched subscriptions
- exporter: export and polling cycles
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("rhsm-exporter")
except PackageNotFoundError:  # local editable install
    __version__ = "0.0.0-dev"

__all__ = [
    "data",
]

from . import data
