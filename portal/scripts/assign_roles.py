"""
Profile and Role Assignment Script
Creates missing profile rows (default role: viewer) for every Supabase Auth
user and optionally sets the global role of one account.
Roles are account-level; users cannot change their own, so this runs with the
service role key.

Usage:
    python -m portal.scripts.assign_roles
    python -m portal.scripts.assign_roles --email lead@example.com --role editor
"""

import argparse
import sys

from portal.core.policy import Role, resolve_role
from portal.database.supabase_client import SupabaseClient
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_missing_profiles(supabase: Client) -> int:
    """Insert a viewer profile for each auth user that has none"""
    logger.info("Seeding missing profiles...")
    users = supabase.auth.admin.list_users()
    existing = supabase.table("profiles").select("id").execute()
    existing_ids = {p["id"] for p in existing.data or []}

    new_profiles = [
        {
            "id": user.id,
            "email": user.email,
            "full_name": (user.user_metadata or {}).get("full_name"),
            "role": Role.VIEWER.value,
        }
        for user in users
        if user.id not in existing_ids
    ]
    if new_profiles:
        supabase.table("profiles").insert(new_profiles).execute()
    logger.info(f"Created {len(new_profiles)} profiles")
    return len(new_profiles)


def assign_role(supabase: Client, email: str, role: str) -> bool:
    """Set the global role of the profile with this email"""
    resolved = resolve_role(role)
    if resolved is None:
        raise ValueError(f"Unknown role '{role}'; expected one of: {', '.join(r.value for r in Role)}")
    result = supabase.table("profiles")\
        .update({"role": resolved.value})\
        .eq("email", email)\
        .execute()
    if not result.data:
        logger.warning(f"No profile found for {email}")
        return False
    logger.info(f"Set role of {email} to {resolved.value}")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed profiles and assign global roles")
    parser.add_argument("--email", help="Account whose role should be set")
    parser.add_argument("--role", choices=[r.value for r in Role], help="Role to assign")
    args = parser.parse_args(argv)
    if bool(args.email) != bool(args.role):
        parser.error("--email and --role must be given together")

    try:
        supabase = SupabaseClient.get_service_client()
        seed_missing_profiles(supabase)
        if args.email and not assign_role(supabase, args.email, args.role):
            sys.exit(1)
    except Exception as e:
        logger.error(f"Error during role assignment: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
