"""
Command line interface for Folder Organizer.
"""
