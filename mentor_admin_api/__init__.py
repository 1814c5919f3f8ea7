"""
Top‑level package for the Mentor Admin API.

This file makes ``mentor_admin_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``mentor_admin_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
