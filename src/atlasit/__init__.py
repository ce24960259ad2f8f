__version__ = "0.1.0"

from .settings import configure_logging, set_data_root, get_data_root

__all__ = [
    "configure_logging",
    "set_data_root",
    "get_data_root",
    "extract_records",
    "ColorRamp",
    "VizSession",
    "load_loans",
    "load_reading_habits",
    "load_library_volumes",
    "load_state_libraries_map",
    "load_province_libraries_map",
    "load_library_points",
    "load_top_event_cities",
]

import logging
logging.getLogger("atlasit").addHandler(logging.NullHandler())

_LAZY = {
    "extract_records": "atlasit.core.logic.extractor",
    "ColorRamp": "atlasit.core.logic.colors",
    "VizSession": "atlasit.app.session",
    "load_loans": "atlasit.app.loans",
    "load_reading_habits": "atlasit.app.reading",
    "load_library_volumes": "atlasit.app.libraries",
    "load_state_libraries_map": "atlasit.app.libraries",
    "load_province_libraries_map": "atlasit.app.libraries",
    "load_library_points": "atlasit.app.libraries",
    "load_top_event_cities": "atlasit.app.events",
}

def __getattr__(name: str):
    if name in _LAZY:
        import importlib
        module = importlib.import_module(_LAZY[name])
        return getattr(module, name)
    raise AttributeError(f"module 'atlasit' has no attribute {name}")

def __dir__():
    return sorted(list(globals().keys()) + __all__)
