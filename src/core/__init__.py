"""Core domain package for rollcall.

Core contains trigger matching, message composition, and dispatch logic
without any Telegram or storage-specific code.
"""
