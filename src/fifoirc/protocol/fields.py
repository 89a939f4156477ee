"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Outbound commands
NICK = "NICK"
USER = "USER"
JOIN = "JOIN"
PRIVMSG = "PRIVMSG"
NOTICE = "NOTICE"
PING = "PING"
PONG = "PONG"
QUIT = "QUIT"

# Service that accepts the identification secret
NICKSERV = "NickServ"

# CTCP capability queries are wrapped in this delimiter
CTCP = "\x01"
VERSION = "VERSION"

# Line terminator and hard ceiling for one line, terminator included
CRLF = b"\r\n"
MAXIMUM = 512

# Outgoing directed messages keep prefix+body within this reserve. The server
# echoes our messages to other clients with our full nick!user@host prepended,
# and that echo must still fit within MAXIMUM.
RESERVE = 450
