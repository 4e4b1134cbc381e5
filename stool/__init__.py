"""stool - operator CLI for remote shells and file transfers.

Resolves a target host and its credentials from a YAML catalog and drives
the system ``ssh``/``scp`` tools (through ``expect`` for password logins).
"""

__version__ = "0.3.0"
