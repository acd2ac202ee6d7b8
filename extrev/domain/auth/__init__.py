"""Registration, login/logout and the session cookie"""

from .router import router

__all__ = ["router"]
