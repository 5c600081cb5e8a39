"""
mdrowser package initializer.
Defines package version and exposes the public API.
"""
__version__ = "0.1.0"

from mdrowser.browser import Browser
from mdrowser.config import BrowserConfig, load_config
from mdrowser.links import extract_domain, find_link_at
from mdrowser.pipeline import MarkdownPipeline
from mdrowser.viewer import ViewerSurface

__all__ = [
    "__version__",
    "Browser",
    "BrowserConfig",
    "MarkdownPipeline",
    "ViewerSurface",
    "extract_domain",
    "find_link_at",
    "load_config",
]
