"""
Legal practice CRM data layer.
"""

__version__ = "1.0.0"
