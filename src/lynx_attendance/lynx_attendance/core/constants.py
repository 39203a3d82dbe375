"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NOTIFICATION_INBOX_LIMIT = 30
TRANSMIT_TITLE = "Daily attendance transmitted"
TRANSMIT_LINK = "/admin/attendance?date={date}"
QR_TOKEN_BYTES = 24
MYSQL_DUPLICATE_KEY_ERRNO = 1062
