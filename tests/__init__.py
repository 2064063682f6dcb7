"""
Test Suite for the CSV Structure Profiler

Provides tests for:
- Type inference (truthiness, sniffers, asserter, row profiler, header detector)
- Delimited reader and file scanner
- Reports and configuration
- Command line and HTTP interfaces
"""

__version__ = "1.0.0"
