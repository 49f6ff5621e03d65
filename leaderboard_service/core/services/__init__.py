"""Core services module.

Feature services subclass BaseService for logging and store-error
translation:

    from leaderboard_service.core.services import BaseService
"""

from leaderboard_service.core.services.base import BaseService

__all__ = ["BaseService"]
