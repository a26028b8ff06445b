"""
fileqa - question answering over uploaded and Drive-hosted files.
"""

__version__ = "0.1.0"
