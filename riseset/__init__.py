"""Sun and Moon rise, set and position calculations."""

from .models import Depression, LocationInfo, ObscuredElevation, Observer, SimpleElevation, SunDirection
from .moon import MoonTransitError, moon_phase, moonrise, moonset
from .settings import SolverSettings, load_settings
from .sun import SunTransitError, dawn, dusk, noon, sunrise, sunset

__version__ = "0.1.0"

__all__ = [
    "Depression",
    "LocationInfo",
    "MoonTransitError",
    "ObscuredElevation",
    "Observer",
    "SimpleElevation",
    "SolverSettings",
    "SunDirection",
    "SunTransitError",
    "dawn",
    "dusk",
    "load_settings",
    "moon_phase",
    "moonrise",
    "moonset",
    "noon",
    "sunrise",
    "sunset",
]
