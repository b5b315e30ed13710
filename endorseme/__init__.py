"""
Endorse Me.

- backend/: API, workflows, persistence, configuration
- frontend/: Server-rendered client screens
- telegram/: Bot API client and WebApp helpers (aiogram v3)
"""
