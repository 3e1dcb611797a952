"""Action mixins composed into Horseman."""

from .base import BaseActions
from .navigation import NavigationActions
from .dom import DOMActions
from .input import InputActions
from .waiting import WaitingActions
from .frames import FrameActions
from .tabs import TabActions
from .capture import CaptureActions
from .scripting import ScriptingActions
from .events import EventActions
from .cookies import CookieActions
from .utility import UtilityActions

__all__ = [
    "BaseActions",
    "NavigationActions",
    "DOMActions",
    "InputActions",
    "WaitingActions",
    "FrameActions",
    "TabActions",
    "CaptureActions",
    "ScriptingActions",
    "EventActions",
    "CookieActions",
    "UtilityActions",
]
