"""
Application package initializer.

The project is organised into layers: ``core`` (configuration,
logging, database, security and errors), ``repositories`` (SQL access
to users, tasks and mentor assignments), ``services`` (workflows built
on the repositories), ``schemas`` (Pydantic response models) and
``api`` (versioned FastAPI routers).
"""

from .main import app  # noqa: F401
