"""
Static data — tool descriptors, package managers, recipes, defaults.

Pure data. No logic beyond building the default layer.
"""

from toolplane.core.data.defaults import default_layer  # noqa: F401
from toolplane.core.data.recipes import (  # noqa: F401
    FALLBACK_MANAGER,
    INSTALL_RECIPES,
)
from toolplane.core.data.tools import (  # noqa: F401
    CAPABILITY_TOOLS,
    PACKAGE_MANAGERS,
    REQUIRED_TOOLS,
)
