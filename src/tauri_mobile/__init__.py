"""tauri-mobile — mobile build environment scaffolding for Tauri apps.

Initializes Android Studio and Xcode projects from a ``tauri.conf.json``
with a strict layered architecture.
"""

import logging

from tauri_mobile.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = ["__version__"]
