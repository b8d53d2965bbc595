"""HTTP routers."""

from tailless.api import ai, auth, moments, spaces, users

routers = [auth.router, users.router, spaces.router, moments.router, ai.router]

__all__ = ["routers"]
