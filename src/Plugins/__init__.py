"""
Plugins package.

Host plugin base class, plugin discovery and the bundled plugin types.
"""
