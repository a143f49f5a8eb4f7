"""
Name: Backend ASGI Entrypoint (hrms.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep this module side-effect free beyond importing hrms.api.main

Notes/Constraints:
  - uvicorn hrms.main:app
"""

from hrms.api.main import app

__all__ = ["app"]
