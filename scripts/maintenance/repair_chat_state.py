#!/usr/bin/env python
"""
Repair denormalized chat state.

Recomputes every active chat's last_message / last_message_at from its
newest visible message and deactivates chats whose participant count is
not two.

Usage:
    python scripts/maintenance/repair_chat_state.py --dry-run
    python scripts/maintenance/repair_chat_state.py
"""

import argparse
import os
import sys

import django

# Add the app directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", "app"))

# Setup Django
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
django.setup()

from chat.maintenance import repair_chat_state  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Repair chat last_message state")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report changes without writing them",
    )
    args = parser.parse_args()

    print("🔧 Chat State Repair")
    print("=" * 40)

    try:
        report = repair_chat_state(dry_run=args.dry_run)
    except KeyboardInterrupt:
        print("\n\n⚠️  Operation interrupted by user")
        return 1

    print(f"📊 Checked {report.checked} active chats")
    print(f"🔁 last_message fixed: {len(report.last_message_fixed)}")
    for chat_id in report.last_message_fixed:
        print(f"   - {chat_id}")
    print(f"🚫 Deactivated: {len(report.deactivated)}")
    for chat_id in report.deactivated:
        print(f"   - {chat_id}")

    if report.dry_run:
        print("\nDry run: nothing was written.")
    elif report.changed == 0:
        print("\n✅ Nothing to repair!")
    else:
        print(f"\n✅ Repaired {report.changed} chats")
    return 0


if __name__ == "__main__":
    sys.exit(main())
