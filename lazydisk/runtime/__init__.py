"""Interactive runtime: progress relay, scan worker, navigator, and app flow.

Exports ``run_app`` lazily so importing model-level helpers such as
``lazydisk.runtime.navigation`` stays free of terminal dependencies.
"""

from __future__ import annotations


def run_app(*args, **kwargs):
    """Lazily import and run the interactive session."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


__all__ = ["run_app"]
