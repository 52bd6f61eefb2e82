#!/usr/bin/env python3
"""
Add an email to the R&D Agent Store waitlist from the command line.

Runs the same validation and submission flow as the signup form, so it is
handy for seeding the list or checking a Supabase project is wired up.

Usage:
    python join_waitlist.py EMAIL [--timeout SECONDS] [--dry-run]

Examples:
    # Add an email
    python join_waitlist.py someone@example.com

    # Validate only, nothing is written
    python join_waitlist.py someone@example.com --dry-run
"""

import sys
import os
import argparse
import asyncio

# Add parent directory to path to import services
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config.settings import SUBMIT_TIMEOUT
from services.waitlist_controller import SubmissionStatus, WaitlistSubmissionController
from utils.logger import log_info, mask_email


async def dry_run_persist(email):
    """Stand-in for add_to_waitlist that writes nothing"""
    log_info(f"[dry run] would add {mask_email(email)} to waitlist")


def get_persist(dry_run=False):
    if dry_run:
        return dry_run_persist
    from services.waitlist_service import add_to_waitlist
    return add_to_waitlist


def main(argv=None):
    parser = argparse.ArgumentParser(description='Add an email to the waitlist')
    parser.add_argument('email', help='Email address to add')
    parser.add_argument('--timeout', type=float, default=SUBMIT_TIMEOUT,
                        help='Seconds to wait for the database (0 disables the limit)')
    parser.add_argument('--dry-run', action='store_true', help='Validate but do not save the email')
    
    args = parser.parse_args(argv)
    
    timeout = args.timeout if args.timeout and args.timeout > 0 else None
    controller = WaitlistSubmissionController(get_persist(args.dry_run), timeout=timeout)
    controller.update_email(args.email)
    
    if args.dry_run:
        print("[DRY RUN MODE - Email will not be saved]")
    
    state = asyncio.run(controller.submit())
    
    if state.status is SubmissionStatus.SUCCESS:
        print(f"✓ {state.message}")
        return 0
    
    print(f"✗ {state.message}")
    return 1


if __name__ == '__main__':
    sys.exit(main())
