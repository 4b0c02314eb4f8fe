# routers/__init__.py
from .auth import router as auth_router
from .communities import router as communities_router
from .energy import router as energy_router
from .quotes import router as quotes_router
from .voting import router as voting_router
from .reporting import router as reporting_router
from .dashboard import router as dashboard_router
from .pages import router as pages_router

__all__ = [
     "auth_router",
     "communities_router",
     "energy_router",
     "quotes_router",
     "voting_router",
     "reporting_router",
     "dashboard_router",
     "pages_router",
]
