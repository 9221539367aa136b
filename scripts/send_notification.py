#!/usr/bin/env python3
"""
Run the notification dispatchers locally

Usage:
    python scripts/send_notification.py [--function FUNCTION_NAME] [--dry-run]

Examples:
    python scripts/send_notification.py --function stats
    python scripts/send_notification.py --function test --dry-run
    python scripts/send_notification.py --function admin --title "Ekadashi" --body "Fast today"
    python scripts/send_notification.py --dry-run  # Runs all functions
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO,
    format='%(message)s'  # Simple format for script output
)

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / '.env')

from gita_connect.notification_dispatcher import (
    get_notification_stats, send_admin_notification, send_test_notification,
    trigger_daily_reminder
)
from gita_connect.services.messaging_service import MessagingClient

FUNCTIONS = ["daily", "test", "admin", "stats"]


def run_function(name, client, args):
    """Run one dispatcher and print its response. Returns True on success."""
    print("=" * 80)
    print(f"Running {name}")
    print("=" * 80)

    if name == "daily":
        body, status = trigger_daily_reminder(client)
    elif name == "test":
        body, status = send_test_notification(client)
    elif name == "admin":
        body, status = send_admin_notification(client, {
            'title': args.title,
            'body': args.body,
            'targetAudience': args.audience,
        })
    else:
        body, status = get_notification_stats()

    print(f"HTTP {status}")
    print(json.dumps(body, indent=2, ensure_ascii=False))
    return status == 200


def main():
    """Main function to run dispatchers"""
    parser = argparse.ArgumentParser(
        description="Run notification dispatchers locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/send_notification.py --function stats
  python scripts/send_notification.py --function test --dry-run
  python scripts/send_notification.py --function admin --title "Ekadashi" --body "Fast today"
        """
    )

    parser.add_argument(
        "--function",
        choices=FUNCTIONS + ["all"],
        default="all",
        help="Which function to run (default: all)"
    )
    parser.add_argument("--title", default="Hare Krishna! 🙏", help="Admin notification title")
    parser.add_argument("--body", default="A message from the Gita Connect team", help="Admin notification body")
    parser.add_argument("--audience", default="all", help="Admin notification targetAudience")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate messages with FCM without delivering them"
    )

    args = parser.parse_args()

    client = MessagingClient(dry_run=True if args.dry_run else None)

    print("=" * 80)
    print("Notification Dispatchers Local Run")
    print("=" * 80)
    print(f"Project: {os.environ.get('GOOGLE_CLOUD_PROJECT') or os.environ.get('GCLOUD_PROJECT', 'not set')}")
    print(f"Running: {args.function}")
    print(f"Dry run: {client.dry_run}")
    print("=" * 80)
    print()

    names = FUNCTIONS if args.function == "all" else [args.function]
    results = {}
    for name in names:
        results[name] = run_function(name, client, args)
        print()

    # Summary
    print("=" * 80)
    print("Summary")
    print("=" * 80)
    for name, success in results.items():
        status = "✓ PASSED" if success else "✗ FAILED"
        print(f"{name:30} {status}")
    print("=" * 80)

    # Exit with error code if any function failed
    if not all(results.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
