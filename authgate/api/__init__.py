"""HTTP endpoints for AuthGate.

- auth: registration, login, admin bootstrap, current user
- protected: demo resources behind the access guards
"""

from .auth import auth_bp
from .protected import protected_bp

__all__ = ["auth_bp", "protected_bp"]
