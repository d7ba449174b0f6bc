"""
Audiobook Studio
================
Job lifecycle and progress-simulation engine for document-to-audiobook
conversion, with a terminal CLI and a Textual dashboard on top.
"""

__version__ = "0.1.0"
