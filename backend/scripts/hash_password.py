#!/usr/bin/env python3
"""
Print a bcrypt hash to put in ADMIN_PASSWORD_HASH.

Usage:
    python scripts/hash_password.py            # prompts for the password
    python scripts/hash_password.py --rounds 14
"""
import argparse
import getpass
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.services.credential_service import hash_password

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--rounds", type=int, default=12, help="bcrypt cost factor")
    args = parser.parse_args()

    password = getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty")
        sys.exit(1)
    if getpass.getpass("Repeat password: ") != password:
        print("Passwords do not match")
        sys.exit(1)

    print(hash_password(password, rounds=args.rounds))
