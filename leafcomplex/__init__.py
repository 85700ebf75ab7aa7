"""LeafComplex — leaf-shape complexity from binary masks."""

__version__ = "0.1.0"
