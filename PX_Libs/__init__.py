"""
PX_Libs - Pixelate Library Modules

This package contains core functionality for the Pixelate project,
organized into specialized sub-packages:

- ImageEditingLib: Pixel editing engine, quantizer, image I/O and instructions
- ProjStoreLib: Persistable editor state (URL query and JSON file store)
"""

__version__ = "0.1.0"
