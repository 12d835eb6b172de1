"""compose-check: sRGB alpha composition kernel and its verification harness."""

__version__ = '0.1.0'
