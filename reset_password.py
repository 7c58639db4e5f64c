#!/usr/bin/env python3
"""
Reset a user's password in the lawn-care SQLite database.

This script does not read or reveal any existing password.  It stores a
new PBKDF2-HMAC-SHA256 hash (format "salthex$hashhex") for the given
username, using the same hashing function as the API.

Usage:
    python reset_password.py --db ./lawncare.db --username admin@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sqlite3
import sys
from typing import List, Optional

from lawncare_api.app.core.security import hash_password


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Reset a lawn-care API user password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./lawncare.db)")
    ap.add_argument("--username", required=True, help="Username to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1

    conn = sqlite3.connect(args.db)
    try:
        cur = conn.cursor()
        cur.execute("SELECT id FROM users WHERE username = ?", (args.username,))
        if cur.fetchone() is None:
            print(f"[!] No user found with username: {args.username}", file=sys.stderr)
            return 2
        cur.execute(
            "UPDATE users SET password = ? WHERE username = ?",
            (hash_password(new_password), args.username),
        )
        conn.commit()
        print(f"[+] Password updated for user: {args.username}")
        return 0
    finally:
        conn.close()


if __name__ == "__main__":
    sys.exit(main())
