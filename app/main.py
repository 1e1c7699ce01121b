"""ASGI entry point: ``uvicorn main:app`` from the ``app`` directory."""

from server.server import handler

app = handler
