"""Pydantic schemas for request/response validation."""

from .auth import *  # noqa: F403
from .booking import *  # noqa: F403
from .chat import *  # noqa: F403
from .common import *  # noqa: F403
from .event import *  # noqa: F403
from .favorites import *  # noqa: F403
from .health import *  # noqa: F403
from .notification import *  # noqa: F403
from .security import *  # noqa: F403
