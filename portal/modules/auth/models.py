# Supabase Auth + table: profiles
# Supabase Auth owns credentials and sessions (auth.users).
# The role used by the access policy lives in a profile row per user.

"""
Expected Supabase table structure:
- id: uuid (primary key, references auth.users.id)
- email: text (not null)
- full_name: text (nullable)
- role: text (not null, one of 'viewer' | 'editor' | 'admin', default 'viewer')
- created_at: timestamp (default: now())

Role is assigned at account level; users cannot update it (enforced by RLS).
"""
