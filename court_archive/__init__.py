"""
Court Archive - records management for court case documents
filed by physical location (block / row / section).
"""

__version__ = "1.0.0"
