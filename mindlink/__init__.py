"""
MindLink application package.

This package contains the local-first state layer (check-in ledger, streaks,
self-assessments), the desktop UI and the chat companion client.
"""

from .config import AppConfig
