# Supabase table: workspace_permissions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- workspace_id: uuid (foreign key to workspaces.id, not null)
- user_id: uuid (foreign key to auth.users.id, not null)
- permission_level: text (not null, e.g. 'viewer' | 'editor')
- primary key (workspace_id, user_id)

The map is sparse: a missing row is not an error and displays as 'viewer'.
"""
