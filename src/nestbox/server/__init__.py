"""ASGI plumbing: response sending, error mapping, and the application."""
