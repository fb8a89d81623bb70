"""
CRE underwriting model: annual pro-forma and returns for a leveraged acquisition.
"""

__version__ = "0.1.0"
