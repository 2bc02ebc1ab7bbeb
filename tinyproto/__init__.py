"""Building blocks for framed serial protocols: CRCs, error codes, an intrusive list and HAL primitives."""

__version__ = "0.1.0"
__all__ = ["crc", "errors", "hal", "listing"]