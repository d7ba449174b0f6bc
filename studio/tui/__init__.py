"""
Terminal UI Module
==================
Textual dashboard for the conversion queue.
"""
