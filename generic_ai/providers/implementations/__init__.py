"""Provider implementations for the supported backends

Providers register themselves with @register_provider and are discovered by
scan_and_import_providers(), which imports every *_providers.py module here.
"""

# No explicit imports needed - modules are imported by the scanner
__all__ = []
