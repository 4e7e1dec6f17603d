"""
Configuration for Folder Organizer.
"""
