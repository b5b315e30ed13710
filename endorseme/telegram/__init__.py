"""
Telegram Module.

aiogram v3 integration. The bot is used only for outgoing messages; there
is no dispatcher, webhook or polling loop.

Structure:
    endorseme/telegram/
    ├── bot.py               # Lazy Bot creation and shutdown
    ├── webapp.py            # WebApp init data and Login Widget helpers
    └── services/
        └── notifications.py # /endorse and /check command sender
"""
