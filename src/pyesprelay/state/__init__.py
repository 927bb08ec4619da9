"""State/store layer.

Holds the client's last-known view of the board and the explicit command
messages that mutate it.  Poll results and user commands are the only
inputs; nothing here performs I/O.
"""
