"""
User interface: main window and widgets.
"""
