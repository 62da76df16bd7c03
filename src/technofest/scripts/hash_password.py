# src/technofest/scripts/hash_password.py
"""Print a bcrypt hash for the ADMIN_PASSWORD_HASH setting.

Usage:
    python -m technofest.scripts.hash_password
"""
from __future__ import annotations

import getpass
import sys

from technofest.core.security import hash_password


def main() -> int:
    password = getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty.", file=sys.stderr)
        return 1
    if password != getpass.getpass("Repeat password: "):
        print("Passwords do not match.", file=sys.stderr)
        return 1
    print(hash_password(password))
    return 0


if __name__ == "__main__":
    sys.exit(main())
