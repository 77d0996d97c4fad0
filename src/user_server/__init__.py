from .app import create_app, main, port_from_env
from .store import User, UserStore

__all__ = ["create_app", "main", "port_from_env", "User", "UserStore"]
