"""
Orama search actions - expose Orama Cloud indexes as agent tools.
"""

__version__ = "0.1.0"
