"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

EVENTS_SHEET = "Events"
ROSTER_SHEET = "Сотрудники"
CODES_SHEET = "Коды"

EVENT_SOURCE = "web"

DEFAULT_TIMEZONE = "Europe/Moscow"
TIMESTAMP_FORMAT = "%d.%m.%Y, %H:%M:%S"

PRESENCE_MARK = 1

MONTHS_RU = ("янв", "фев", "мар", "апр", "май", "июн", "июл", "авг", "сен", "окт", "ноя", "дек")
