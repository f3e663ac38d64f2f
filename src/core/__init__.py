"""Core domain package for chatscribe.

Core contains chat classification, session tracking, and record formatting
without any file-system or console-specific code, keeping the logic portable.
"""
