"""
MachineTranslation plugins.

Connectors implementing the host's machine translation capability.
"""
