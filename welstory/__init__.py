"""
                    Welstory Plus Client

Async client for the Welstory Plus cafeteria service: login, session
refresh, restaurant search and registration, meal times, meals and
per-item nutrients.

Version: 1.0.0
License: MIT
"""

from welstory.client import WelstoryClient
from welstory.core.config import Settings, TransportMode, get_settings, setup_logging
from welstory.core.exceptions import (
    AlreadyRegisteredError,
    AuthenticationError,
    DataFormatError,
    InvalidTokenError,
    NotRegisteredError,
    ParseError,
    RegistrationError,
    RequestError,
    SearchError,
    SessionError,
    StateConflictError,
    TransportError,
    TransportUnavailableError,
    UnregistrationError,
    WelstoryError,
)
from welstory.endpoints import Endpoints
from welstory.meal import WelstoryMeal
from welstory.restaurant import WelstoryRestaurant
from welstory.schemas import MealMenu, MealTime, UserInfo
from welstory.services.transport import (
    BaseTransport,
    HttpResponse,
    MockTransport,
    get_transport,
    reset_transport,
)
from welstory.utils import generate_id

__version__ = "1.0.0"

__all__ = [
    "WelstoryClient",
    "WelstoryRestaurant",
    "WelstoryMeal",
    "MealMenu",
    "MealTime",
    "UserInfo",
    "Endpoints",
    "Settings",
    "TransportMode",
    "get_settings",
    "setup_logging",
    "BaseTransport",
    "HttpResponse",
    "MockTransport",
    "get_transport",
    "reset_transport",
    "generate_id",
    "WelstoryError",
    "TransportError",
    "TransportUnavailableError",
    "ParseError",
    "DataFormatError",
    "RequestError",
    "SearchError",
    "SessionError",
    "RegistrationError",
    "UnregistrationError",
    "AuthenticationError",
    "InvalidTokenError",
    "StateConflictError",
    "AlreadyRegisteredError",
    "NotRegisteredError",
]
